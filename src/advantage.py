# advantage.py
"""
Reward-to-go targets and GAE-lambda advantages for a single episode.

All sums are computed directly from the precomputed discount tables:
    result[i] = sum_k sequence[i + k] * discount_powers[k]
which is the closed form of the usual backward recursion
    A[t] = delta[t] + gamma * lam * A[t + 1],  A[n] = 0.
"""

import numpy as np

from config import DiscountTables


def discounted_sum(sequence, discount_powers):
    """
    Reverse discounted cumulative sum, each index summed independently.
    discount_powers must have at least len(sequence) entries.
    """
    seq = np.asarray(sequence, dtype=np.float32)
    powers = np.asarray(discount_powers, dtype=np.float32)
    n = len(seq)
    if len(powers) < n:
        raise ValueError(
            f"discount table has {len(powers)} entries, sequence needs {n}"
        )
    res = np.empty_like(seq)
    for i in range(n):
        res[i] = np.dot(seq[i:], powers[: n - i])
    return res


def rewards_to_go(rewards, tables: DiscountTables):
    return discounted_sum(rewards, tables.gamma_pows)


def td_residuals(rewards, values, gamma):
    """
    delta[t] = r[t] + gamma * V[t + 1] - V[t].
    values has one more entry than rewards (the bootstrap value, 0 at episode end).
    """
    rewards = np.asarray(rewards, dtype=np.float32)
    values = np.asarray(values, dtype=np.float32)
    if len(values) != len(rewards) + 1:
        raise ValueError(
            f"expected {len(rewards) + 1} values for {len(rewards)} rewards, got {len(values)}"
        )
    return rewards + np.float32(gamma) * values[1:] - values[:-1]


def gae_advantages(rewards, values, tables: DiscountTables):
    deltas = td_residuals(rewards, values, tables.gamma)
    return discounted_sum(deltas, tables.gamma_lambda_pows)
