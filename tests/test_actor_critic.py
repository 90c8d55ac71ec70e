import numpy as np
import pytest
import torch

from actor_critic import (
    ActorCritic,
    ActorCriticTrainer,
    normalize_advantages,
    policy_loss,
    value_loss,
)
from gaussian_policy import gaussian_log_prob
from memory_buffer import Batch
from rollout import collect_batch

from conftest import FixedLengthEnv


def make_batch(n=32, state_size=3, seed=0):
    rng = np.random.default_rng(seed)
    return Batch(
        states=rng.normal(size=(n, state_size)).astype(np.float32),
        actions=rng.normal(size=n).astype(np.float32),
        log_probs=rng.normal(size=n).astype(np.float32),
        rewards_to_go=rng.normal(size=n).astype(np.float32),
        advantages=rng.normal(size=n).astype(np.float32),
        mean_episode_reward=0.0,
    )


def test_network_shapes():
    model = ActorCritic(state_dim=4)
    states = torch.randn(10, 4)
    assert model.actor(states).shape == (10, 1)
    assert model.critic(states).shape == (10, 1)
    assert model.log_std.item() == pytest.approx(-0.5)


def test_get_action_and_value_returns_floats(generator):
    model = ActorCritic(state_dim=3)
    action, log_prob, value = model.get_action_and_value(np.zeros(3, dtype=np.float32), generator)
    assert all(isinstance(x, float) for x in (action, log_prob, value))


def test_policy_loss_recomputes_log_probs():
    torch.manual_seed(0)
    model = ActorCritic(state_dim=3)
    states = torch.randn(8, 3)
    actions = torch.randn(8)
    adv = torch.randn(8)

    mu = model.actor(states).squeeze(-1)
    expected = -(gaussian_log_prob(actions, mu, model.log_std) * adv).mean()
    assert policy_loss(model, states, actions, adv).item() == pytest.approx(expected.item())


def test_policy_loss_zero_advantage():
    model = ActorCritic(state_dim=3)
    loss = policy_loss(model, torch.randn(5, 3), torch.randn(5), torch.zeros(5))
    assert loss.item() == 0.0


def test_value_loss_is_mse():
    torch.manual_seed(0)
    model = ActorCritic(state_dim=3)
    states = torch.randn(6, 3)
    targets = torch.randn(6)
    preds = model.critic(states).squeeze(-1)
    expected = ((preds - targets) ** 2).mean()
    assert value_loss(model, states, targets).item() == pytest.approx(expected.item(), rel=1e-6)


def test_normalize_advantages():
    adv = torch.tensor([1.0, 2.0, 3.0, 10.0])
    norm = normalize_advantages(adv)
    assert norm.mean().item() == pytest.approx(0.0, abs=1e-6)
    assert norm.std().item() == pytest.approx(1.0, abs=1e-5)


def test_normalize_constant_advantages():
    adv = torch.full((4,), 2.0)
    assert torch.isfinite(normalize_advantages(adv, eps=1e-8)).all()
    assert not torch.isfinite(normalize_advantages(adv, eps=0.0)).any()


def test_normalize_single_advantage_is_zero():
    for eps in (1e-8, 0.0):
        norm = normalize_advantages(torch.tensor([3.5]), eps=eps)
        assert norm.tolist() == [0.0]


def test_update_on_one_transition_batch_keeps_parameters_finite(tables, generator):
    torch.manual_seed(0)
    trainer = ActorCriticTrainer(state_dim=3, hidden_sizes=(8, 8))
    batch = collect_batch(FixedLengthEnv(length=1), trainer.model, tables, 1, generator)
    assert len(batch) == 1

    stats = trainer.update(batch)

    assert all(np.isfinite(v) for v in stats.values())
    assert torch.isfinite(trainer.model.log_std)
    assert all(torch.isfinite(p).all() for p in trainer.model.parameters())


def test_update_moves_both_networks_and_log_std():
    torch.manual_seed(0)
    trainer = ActorCriticTrainer(state_dim=3, hidden_sizes=(8, 8), lr_actor=1e-2, lr_critic=1e-2)
    model = trainer.model
    actor_before = [p.detach().clone() for p in model.actor.parameters()]
    critic_before = [p.detach().clone() for p in model.critic.parameters()]
    log_std_before = model.log_std.item()

    stats = trainer.update(make_batch())

    assert set(stats) == {"policy_loss", "value_loss", "log_std"}
    assert any(not torch.equal(a, b) for a, b in zip(actor_before, model.actor.parameters()))
    assert any(not torch.equal(a, b) for a, b in zip(critic_before, model.critic.parameters()))
    assert model.log_std.item() != log_std_before


def test_update_rejects_empty_batch():
    trainer = ActorCriticTrainer(state_dim=3)
    with pytest.raises(ValueError):
        trainer.update(make_batch(n=0))


def test_optimizers_own_disjoint_parameters():
    trainer = ActorCriticTrainer(state_dim=3)
    actor_ids = {id(p) for g in trainer.actor_opt.param_groups for p in g["params"]}
    critic_ids = {id(p) for g in trainer.critic_opt.param_groups for p in g["params"]}
    assert actor_ids.isdisjoint(critic_ids)
    assert id(trainer.model.log_std) in actor_ids
