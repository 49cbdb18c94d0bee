from gymnasium.envs.registration import register
from .env import DeckCrawlEnv
from .game import Game

register(
    id="deckcrawl-gym/DeckCrawl-v0",
    entry_point="deckcrawl_gym.env:DeckCrawlEnv",
)

def make(id: str, **kwargs):
    if id == "DeckCrawl-v0":
        return DeckCrawlEnv(**kwargs)
    raise ValueError(f"Unknown id {id}")
