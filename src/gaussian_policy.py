# gaussian_policy.py
"""
Closed-form Gaussian policy head: sampling plus the matching log-density.

The same gaussian_log_prob is used at rollout time (one scalar action) and
inside the policy loss (a batch of actions), so both always see the same sigma.
"""

import math
from typing import Optional, Tuple

import torch

LOG_SQRT_2PI = math.log(math.sqrt(2 * math.pi))


def gaussian_log_prob(action, mu, log_std):
    """log N(action | mu, exp(log_std)^2), elementwise for tensors."""
    var = torch.exp(log_std) ** 2
    return -((action - mu) ** 2) / (2 * var) - log_std - LOG_SQRT_2PI


@torch.no_grad()
def sample_action(
    mu: torch.Tensor, log_std: torch.Tensor, generator: Optional[torch.Generator] = None
) -> Tuple[float, float]:
    """
    Draw action ~ Normal(mu, exp(log_std)) for a single state and return
    (action, log_prob) as python floats.
    """
    mu = torch.as_tensor(mu, dtype=torch.float32).reshape(())
    log_std = torch.as_tensor(log_std, dtype=torch.float32).reshape(())
    sigma = torch.exp(log_std)
    noise = torch.randn((), generator=generator).to(mu.device)
    action = mu + sigma * noise
    log_prob = gaussian_log_prob(action, mu, log_std)
    return float(action), float(log_prob)
