"""
Evaluation script for baseline policies in the asteroids environment
"""

import argparse
import logging
from typing import Callable, Dict, Optional

import numpy as np

from game.asteroids import AsteroidsEnv
from rl.configs.asteroids_config import ENV_CONFIG, EVAL_CONFIG


def random_policy(env: AsteroidsEnv) -> Callable[[np.ndarray], np.ndarray]:
    """Uniformly random actions"""
    return lambda obs: env.action_space.sample()


def turret_policy(env: AsteroidsEnv) -> Callable[[np.ndarray], np.ndarray]:
    """Sit still, spin right and keep pressing fire"""
    return lambda obs: np.array([0, 2, 1], dtype=np.int64)


POLICIES = {
    "random": random_policy,
    "turret": turret_policy,
}


def evaluate_policy(
    policy: str = "random",
    n_episodes: int = 10,
    render: bool = False,
    seed: Optional[int] = None,
    env_config: Optional[Dict] = None,
):
    """
    Run a baseline policy and collect episode statistics

    Args:
        policy: Name of the policy ('random' or 'turret')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Seed of the first episode; later episodes use seed + i
        env_config: Overrides for ENV_CONFIG
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")

    config = dict(ENV_CONFIG)
    config.update(env_config or {})
    env = AsteroidsEnv(render_mode="human" if render else None, **config)
    act = POLICIES[policy](env)
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards = []
    episode_lengths = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(obs))
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Crashed = {terminated}")

    env.close()

    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)
    mean_length = np.mean(episode_lengths)

    print("\n" + "=" * 50)
    print(f"{policy} policy ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print(f"Min Reward: {np.min(episode_rewards):.2f}")
    print(f"Max Reward: {np.max(episode_rewards):.2f}")
    print("=" * 50)

    return {
        "mean_reward": float(mean_reward),
        "std_reward": float(std_reward),
        "mean_length": float(mean_length),
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate baseline policies")
    parser.add_argument(
        "--policy",
        type=str,
        default="random",
        choices=sorted(POLICIES),
        help="Policy to evaluate (default: random)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_eval_episodes"],
        help="Number of evaluation episodes (default: %(default)s)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Draw episodes in an arcade window",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seeds"][0],
        help="Random seed (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine events",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    evaluate_policy(
        policy=args.policy,
        n_episodes=args.n_episodes,
        render=args.render,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
