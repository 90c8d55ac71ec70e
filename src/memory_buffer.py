# memory_buffer.py
"""
Episode trajectories and the per-epoch batch buffer.
The batch buffer appends whole episodes to python lists and concatenates
once when the batch is handed to the update, so growth is amortized.
"""

from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass
class Trajectory:
    """One episode. values has len(rewards) + 1 entries, the last one is 0."""

    states: np.ndarray  # (n_steps, state_size)
    actions: np.ndarray  # (n_steps,)
    log_probs: np.ndarray  # (n_steps,) log prob at sampling time
    rewards: np.ndarray  # (n_steps,)
    values: np.ndarray  # (n_steps + 1,)

    def __len__(self):
        return len(self.rewards)

    @property
    def total_reward(self) -> float:
        return float(self.rewards.sum())


@dataclass
class Batch:
    states: np.ndarray
    actions: np.ndarray
    log_probs: np.ndarray
    rewards_to_go: np.ndarray
    advantages: np.ndarray
    mean_episode_reward: float

    def __len__(self):
        return len(self.actions)


class RolloutBuffer:
    def __init__(self, state_size: int):
        self.state_size = state_size
        self.clear()

    def clear(self):
        self.states: List[np.ndarray] = []
        self.actions: List[np.ndarray] = []
        self.log_probs: List[np.ndarray] = []  # recorded, not used by the policy loss
        self.rewards_to_go: List[np.ndarray] = []
        self.advantages: List[np.ndarray] = []
        self.n_transitions = 0
        self.n_episodes = 0
        self.reward_sum = 0.0

    def add_episode(self, traj: Trajectory, rewards_to_go, advantages):
        self.states.append(traj.states)
        self.actions.append(traj.actions)
        self.log_probs.append(traj.log_probs)
        self.rewards_to_go.append(np.asarray(rewards_to_go, dtype=np.float32))
        self.advantages.append(np.asarray(advantages, dtype=np.float32))
        self.n_transitions += len(traj)
        self.n_episodes += 1
        self.reward_sum += traj.total_reward

    @property
    def mean_episode_reward(self) -> float:
        if self.n_episodes == 0:
            return 0.0
        return self.reward_sum / self.n_episodes

    def to_batch(self) -> Batch:
        def cat(parts, tail_shape=()):
            if not parts:
                return np.empty((0,) + tail_shape, dtype=np.float32)
            return np.concatenate(parts, axis=0)

        return Batch(
            states=cat(self.states, (self.state_size,)),
            actions=cat(self.actions),
            log_probs=cat(self.log_probs),
            rewards_to_go=cat(self.rewards_to_go),
            advantages=cat(self.advantages),
            mean_episode_reward=self.mean_episode_reward,
        )

    def __len__(self):
        return self.n_transitions
