# evaluate_agent.py
import argparse

import numpy as np

from deckcrawl_gym.agents import HeuristicAgent, RandomAgent
from deckcrawl_gym.env import DeckCrawlEnv

MAX_STEPS = 2000


def run_episode(env, agent, seed):
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(MAX_STEPS):
        action, _ = agent.get_action(obs, env)
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        if terminated or truncated:
            break
    return {
        "total_reward": total_reward,
        "floor_reached": info["floor"],
        "won": info["phase"] == "WON",
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--agent', choices=['heuristic', 'random'], default='heuristic')
    parser.add_argument('--episodes', type=int, default=1000)
    parser.add_argument('--seed', type=int, default=0)
    args = parser.parse_args()

    env = DeckCrawlEnv()
    agent = HeuristicAgent() if args.agent == 'heuristic' else RandomAgent(seed=args.seed)

    print(f"Running {args.episodes} episodes with the {args.agent} agent...")
    results = [run_episode(env, agent, args.seed + i) for i in range(args.episodes)]

    rewards = np.array([r["total_reward"] for r in results])
    floors = np.array([r["floor_reached"] for r in results])
    wins = np.array([r["won"] for r in results])

    print(f"Win rate: {wins.mean():.1%}")
    print(f"Average floor reached: {floors.mean():.2f}")
    print(f"Average reward: {rewards.mean():.2f} (std {rewards.std():.2f})")

if __name__ == "__main__":
    main()
