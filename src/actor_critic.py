# actor_critic.py
import numpy as np
import torch
import torch.nn as nn

from gaussian_policy import gaussian_log_prob, sample_action
from memory_buffer import Batch


def mlp(in_dim, hidden_sizes, out_dim=1):
    layers = []
    for h in hidden_sizes:
        layers += [nn.Linear(in_dim, h), nn.Tanh()]
        in_dim = h
    layers += [nn.Linear(in_dim, out_dim)]
    return nn.Sequential(*layers)


class ActorCritic(nn.Module):
    """
    actor: state -> mean of a 1-d Gaussian action
    log_std: single learned scalar, not state dependent
    critic: state -> V(s)
    """

    def __init__(self, state_dim, hidden_sizes=(64, 64), init_log_std=-0.5):
        super().__init__()
        self.actor = mlp(state_dim, hidden_sizes)
        self.critic = mlp(state_dim, hidden_sizes)
        self.log_std = nn.Parameter(torch.tensor(float(init_log_std)))

    def forward(self):
        raise NotImplementedError

    def actor_parameters(self):
        return list(self.actor.parameters()) + [self.log_std]

    def critic_parameters(self):
        return list(self.critic.parameters())

    @torch.no_grad()
    def get_action_and_value(self, state, generator=None):
        """Single numpy state -> (action, log_prob, value) as python floats."""
        device = self.log_std.device
        s = torch.as_tensor(state, dtype=torch.float32, device=device).unsqueeze(0)
        mu = self.actor(s).squeeze()
        action, log_prob = sample_action(mu, self.log_std, generator)
        value = float(self.critic(s).squeeze())
        return action, log_prob, value


def policy_loss(model: ActorCritic, states, actions, advantages):
    """
    -mean(log pi(a|s) * A) with log pi recomputed from the current parameters.
    advantages are expected to be normalized already.
    """
    mu = model.actor(states).squeeze(-1)
    log_probs = gaussian_log_prob(actions, mu, model.log_std)
    return -(log_probs * advantages).mean()


def value_loss(model: ActorCritic, states, rewards_to_go):
    values = model.critic(states).squeeze(-1)
    return nn.functional.mse_loss(values, rewards_to_go)


def normalize_advantages(advantages: torch.Tensor, eps=1e-8):
    # unbiased std; eps=0 gives the unguarded (mean, std) normalization
    if advantages.numel() < 2:
        # std of a single sample is undefined, centering alone gives zeros
        return advantages - advantages.mean()
    return (advantages - advantages.mean()) / (advantages.std() + eps)


class ActorCriticTrainer:
    def __init__(
        self,
        state_dim,
        hidden_sizes=(64, 64),
        init_log_std=-0.5,
        lr_actor=3e-4,
        lr_critic=3e-4,
        adv_eps=1e-8,
        device="cpu",
    ):
        self.device = torch.device(device)
        self.adv_eps = adv_eps
        self.model = ActorCritic(state_dim, hidden_sizes, init_log_std).to(self.device)

        # independent optimizers, log_std is trained with the actor
        self.actor_opt = torch.optim.Adam(self.model.actor_parameters(), lr=lr_actor)
        self.critic_opt = torch.optim.Adam(self.model.critic_parameters(), lr=lr_critic)

    @classmethod
    def from_config(cls, config, state_dim):
        return cls(
            state_dim,
            hidden_sizes=config.hidden_sizes,
            init_log_std=config.init_log_std,
            lr_actor=config.lr_actor,
            lr_critic=config.lr_critic,
            adv_eps=config.adv_eps,
            device=config.device,
        )

    def _tensor(self, x):
        return torch.as_tensor(np.asarray(x), dtype=torch.float32, device=self.device)

    def update(self, batch: Batch):
        """One gradient step for the policy, then one for the value function."""
        if len(batch) == 0:
            raise ValueError("cannot update on an empty batch")

        states = self._tensor(batch.states)
        actions = self._tensor(batch.actions)
        r2g = self._tensor(batch.rewards_to_go)
        advantages = normalize_advantages(self._tensor(batch.advantages), self.adv_eps)

        p_loss = policy_loss(self.model, states, actions, advantages)
        self.actor_opt.zero_grad()
        p_loss.backward()
        self.actor_opt.step()

        v_loss = value_loss(self.model, states, r2g)
        self.critic_opt.zero_grad()
        v_loss.backward()
        self.critic_opt.step()

        return {
            "policy_loss": p_loss.item(),
            "value_loss": v_loss.item(),
            "log_std": self.model.log_std.item(),
        }
