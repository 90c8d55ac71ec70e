import numpy as np
import pytest
import torch
import torch.nn as nn

from actor_critic import ActorCritic
from config import DiscountTables


class FixedLengthEnv:
    """Reward 1.0 every step, done after exactly `length` steps, action ignored."""

    def __init__(self, length=5, reward=1.0, state_size=3):
        self.length = length
        self.reward = reward
        self.state_size = state_size
        self.t = 0
        self.resets = 0

    def reset(self):
        self.t = 0
        self.resets += 1
        return np.zeros(self.state_size, dtype=np.float32)

    def step(self, state, action):
        self.t += 1
        state[:] = self.t
        return self.reward, self.t >= self.length


class NeverDoneEnv(FixedLengthEnv):
    def step(self, state, action):
        reward, _ = super().step(state, action)
        return reward, False


@pytest.fixture
def stub_env():
    return FixedLengthEnv(length=5, reward=1.0, state_size=3)


@pytest.fixture
def zero_critic_model():
    torch.manual_seed(0)
    model = ActorCritic(state_dim=3, hidden_sizes=(16, 16))
    nn.init.zeros_(model.critic[-1].weight)
    nn.init.zeros_(model.critic[-1].bias)
    return model


@pytest.fixture
def tables():
    return DiscountTables.build(gamma=0.99, lam=0.97, max_steps=20)


@pytest.fixture
def generator():
    gen = torch.Generator()
    gen.manual_seed(1234)
    return gen
