# rollout.py
"""
Episode collection and per-epoch batch aggregation.
"""

import numpy as np

from actor_critic import ActorCritic
from advantage import gae_advantages, rewards_to_go
from config import DiscountTables
from env_adapter import Environment
from memory_buffer import Batch, RolloutBuffer, Trajectory


def run_episode(env: Environment, model: ActorCritic, max_steps: int, generator=None) -> Trajectory:
    """
    Run one episode of at most max_steps steps.
    The terminating transition's reward is kept, the post-terminal state is not.
    values gets a final bootstrap entry of 0 which the critic never produces.
    """
    if max_steps < 1:
        raise ValueError(f"max_steps must be positive, got {max_steps}")

    states = np.empty((max_steps, env.state_size), dtype=np.float32)
    actions = np.empty(max_steps, dtype=np.float32)
    log_probs = np.empty(max_steps, dtype=np.float32)
    rewards = np.empty(max_steps, dtype=np.float32)
    values = np.empty(max_steps + 1, dtype=np.float32)

    state = env.reset()
    n_steps = max_steps
    for i in range(max_steps):
        states[i] = state

        action, log_prob, value = model.get_action_and_value(state, generator)
        actions[i] = action
        log_probs[i] = log_prob
        values[i] = value

        reward, done = env.step(state, action)
        rewards[i] = reward

        if done:
            n_steps = i + 1
            break

    values[n_steps] = 0.0
    return Trajectory(
        states=states[:n_steps].copy(),
        actions=actions[:n_steps].copy(),
        log_probs=log_probs[:n_steps].copy(),
        rewards=rewards[:n_steps].copy(),
        values=values[: n_steps + 1].copy(),
    )


def collect_batch(
    env: Environment,
    model: ActorCritic,
    tables: DiscountTables,
    min_size: int,
    generator=None,
) -> Batch:
    """
    Run whole episodes until at least min_size transitions are collected.
    The last episode is never cut, so the batch can overshoot by up to one episode.
    """
    if min_size < 1:
        raise ValueError(f"min_size must be positive, got {min_size}")

    max_steps = len(tables)
    buffer = RolloutBuffer(env.state_size)
    while len(buffer) < min_size:
        traj = run_episode(env, model, max_steps, generator)
        r2g = rewards_to_go(traj.rewards, tables)
        adv = gae_advantages(traj.rewards, traj.values, tables)
        buffer.add_episode(traj, r2g, adv)

    return buffer.to_batch()
