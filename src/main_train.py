# main_train.py
import time

from actor_critic import ActorCriticTrainer
from config import DiscountTables, TrainConfig
from env_adapter import GymEnvAdapter
from rollout import collect_batch
from utils import append_metric, format_duration, make_generator, set_seed


def train(config: TrainConfig, env=None):
    """
    Run config.n_epochs epochs: collect a batch of whole episodes, then take
    one policy step and one value step. Returns the per-epoch mean episode reward.
    """
    set_seed(config.seed)
    owns_env = env is None
    if owns_env:
        env = GymEnvAdapter(config.env_id, seed=config.seed)

    tables = DiscountTables.from_config(config)
    trainer = ActorCriticTrainer.from_config(config, env.state_size)
    generator = make_generator(config.seed)

    print(
        f"[INFO] env={config.env_id} state_size={env.state_size} "
        f"epochs={config.n_epochs} batch_size={config.batch_size}"
    )

    reward_history = []
    try:
        for epoch in range(1, config.n_epochs + 1):
            st = time.time()

            batch = collect_batch(env, trainer.model, tables, config.batch_size, generator)
            mean_reward = batch.mean_episode_reward
            reward_history.append(mean_reward)
            print(f"[EPOCH {epoch}] ave rewards per episode: {mean_reward:.4f}")
            append_metric(config.log_path, mean_reward)

            stats = trainer.update(batch)

            print(
                f"\tpolicy loss: {stats['policy_loss']:.4f} | value loss: {stats['value_loss']:.4f} "
                f"| log_std: {stats['log_std']:.4f} | step time: {format_duration(time.time() - st)}"
            )
    finally:
        if owns_env:
            env.close()

    return reward_history


def main():
    start = time.time()
    train(TrainConfig())
    print(f"[DONE] total time: {format_duration(time.time() - start)}")


if __name__ == "__main__":
    main()
