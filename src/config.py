# config.py
"""
Training configuration and the discount-power tables derived from it.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class TrainConfig:
    """Hyperparameters for one training run."""

    # Environment
    env_id: str = "Pendulum-v1"
    max_steps: int = 200

    # Returns / advantages
    gamma: float = 0.99
    lam: float = 0.97
    adv_eps: float = 1e-8

    # Networks
    hidden_sizes: Tuple[int, ...] = (64, 64)
    init_log_std: float = -0.5
    lr_actor: float = 3e-4
    lr_critic: float = 3e-4

    # Training
    n_epochs: int = 100
    batch_size: int = 1000
    seed: int = 42
    device: str = "cpu"

    # Logging
    log_path: str = "training_rewards.csv"

    def __post_init__(self):
        if not 0.0 < self.gamma < 1.0:
            raise ValueError(f"gamma must be in (0, 1), got {self.gamma}")
        if not 0.0 < self.lam < 1.0:
            raise ValueError(f"lam must be in (0, 1), got {self.lam}")
        for name in ("max_steps", "n_epochs", "batch_size"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.adv_eps < 0.0:
            raise ValueError(f"adv_eps must be non-negative, got {self.adv_eps}")


@dataclass(frozen=True, eq=False)
class DiscountTables:
    """
    gamma_pows[k] = gamma^k and gamma_lambda_pows[k] = (gamma * lam)^k
    for k = 0 .. max_steps - 1. Built once per run, read-only afterwards.
    """

    gamma: float
    gamma_pows: np.ndarray
    gamma_lambda_pows: np.ndarray

    @classmethod
    def build(cls, gamma: float, lam: float, max_steps: int) -> "DiscountTables":
        k = np.arange(max_steps, dtype=np.float64)
        gamma_pows = np.power(gamma, k).astype(np.float32)
        gamma_lambda_pows = np.power(gamma * lam, k).astype(np.float32)
        gamma_pows.setflags(write=False)
        gamma_lambda_pows.setflags(write=False)
        return cls(gamma, gamma_pows, gamma_lambda_pows)

    @classmethod
    def from_config(cls, config: TrainConfig) -> "DiscountTables":
        return cls.build(config.gamma, config.lam, config.max_steps)

    def __len__(self):
        return len(self.gamma_pows)
