# env_adapter.py
"""
Environment adapter used by the episode roller.

The roller only needs two calls:
- reset() -> state
- step(state, action) -> (reward, done)

step() advances the environment and writes the next observation into
`state` in place, so the caller keeps reading the same array.
"""

from typing import Optional, Protocol, Tuple

import gymnasium as gym
import numpy as np


class Environment(Protocol):
    state_size: int

    def reset(self) -> np.ndarray: ...

    def step(self, state: np.ndarray, action: float) -> Tuple[float, bool]: ...


class GymEnvAdapter:
    """Wraps a gymnasium env with a 1-d continuous (Box) action space."""

    def __init__(self, env_id="Pendulum-v1", seed: Optional[int] = None, **make_kwargs):
        self.env = gym.make(env_id, **make_kwargs)
        space = self.env.action_space
        if not isinstance(space, gym.spaces.Box) or int(np.prod(space.shape)) != 1:
            self.env.close()
            raise ValueError(f"{env_id} needs a scalar continuous action, got {space}")
        self.state_size = int(np.prod(self.env.observation_space.shape))
        self.action_shape = self.env.action_space.shape
        self._seed = seed

    def reset(self) -> np.ndarray:
        # seed only the first reset, later episodes continue the env's RNG stream
        obs, _ = self.env.reset(seed=self._seed)
        self._seed = None
        return np.asarray(obs, dtype=np.float32).reshape(self.state_size).copy()

    def step(self, state: np.ndarray, action: float) -> Tuple[float, bool]:
        a = np.full(self.action_shape, action, dtype=np.float32)
        obs, reward, terminated, truncated, _ = self.env.step(a)
        state[:] = np.asarray(obs, dtype=np.float32).reshape(self.state_size)
        return float(reward), bool(terminated or truncated)

    def close(self):
        self.env.close()
