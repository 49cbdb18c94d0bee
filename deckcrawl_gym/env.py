"""
deckcrawl_gym/env.py
====================

Gymnasium environment for the dungeon card game in :mod:`deckcrawl_gym.game`.

Gameplay
--------
* **Floor phase**: use a room card (jokers also name a card to destroy), or
  flee a full room. The room is refreshed after every floor action.
* **Shop phase**: buy cards for the next floor, then continue.

The unified action space is **Discrete(22)** (see :mod:`deckcrawl_gym.actions`).
At each step, ``action_mask`` exposes only the legal subset of that space.

Observation
-----------
Dict(
    room              : Box(0, 54, (4,))  – card codes, 0 = empty slot
    shop              : Box(0, 54, (4,))  – cards on sale
    health, money, weapon_damage, weapon_durability (0 = pristine),
    dungeon_size, bosses_left, floor, phase, fled : Discrete
    action_mask       : MultiBinary(22)
)

Reward
------
+1 for every floor cleared, +10 for winning, -1 for losing, -1 for a masked
action (which leaves the game untouched).
"""

from __future__ import annotations

from typing import Dict, List, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from deckcrawl_gym.actions import JOKER_PAIRS, decode, encode_buy, encode_joker, encode_use
from deckcrawl_gym.cards import Card, Joker, RegularCard
from deckcrawl_gym.constants import (
    ACTION_SPACE_SIZE,
    HEALTH_LIMIT,
    ROOM_SIZE,
    SHOP_SIZE,
    Action,
    Phase,
)
from deckcrawl_gym.game import Game
from deckcrawl_gym.render import format_game
from deckcrawl_gym.rng import DeterministicRNG

NUM_CARD_CODES = 55     # 0 empty, 1–52 regular, 53–54 jokers
MAX_MONEY = 9999
MAX_FLOORS = 8

FLOOR_REWARD = 1.0
WIN_REWARD = 10.0
LOSS_REWARD = -1.0
INVALID_ACTION_REWARD = -1.0


def card_code(card: Card) -> int:
    match card:
        case RegularCard(suit=suit, rank=rank):
            return int(suit) * 13 + int(rank)
        case Joker(color=color):
            return 53 + int(color)


def _codes(cards: List[Card], size: int) -> np.ndarray:
    out = np.zeros((size,), dtype=np.int64)
    for i, card in enumerate(cards[:size]):
        out[i] = card_code(card)
    return out


class DeckCrawlEnv(gym.Env):
    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(self, *, render_mode: str | None = None, seed: int | None = None):
        super().__init__()
        self.render_mode = render_mode
        self._seed = seed

        self.action_space = spaces.Discrete(ACTION_SPACE_SIZE)
        self.observation_space = spaces.Dict(
            {
                "room": spaces.Box(0, NUM_CARD_CODES - 1, shape=(ROOM_SIZE,), dtype=np.int64),
                "shop": spaces.Box(0, NUM_CARD_CODES - 1, shape=(SHOP_SIZE,), dtype=np.int64),
                "health": spaces.Discrete(HEALTH_LIMIT + 1),
                "money": spaces.Discrete(MAX_MONEY + 1),
                "weapon_damage": spaces.Discrete(14),
                "weapon_durability": spaces.Discrete(HEALTH_LIMIT + 1),
                "dungeon_size": spaces.Discrete(NUM_CARD_CODES),
                "bosses_left": spaces.Discrete(9),
                "floor": spaces.Discrete(MAX_FLOORS + 1),
                "phase": spaces.Discrete(len(Phase)),
                "fled": spaces.Discrete(2),
                "action_mask": spaces.MultiBinary(ACTION_SPACE_SIZE),
            }
        )

        self.game: Optional[Game] = None
        self._terminated = False

    # ------------------------------- Helpers -------------------------------- #

    def _action_mask(self) -> np.ndarray:
        mask = np.zeros(ACTION_SPACE_SIZE, dtype=np.int8)
        game = self.game

        if game.phase is Phase.FLOOR:
            for i, card in enumerate(game.room):
                if isinstance(card, Joker):
                    for joker, target in JOKER_PAIRS:
                        if joker == i and target < len(game.room):
                            mask[encode_joker(joker + 1, target + 1)] = 1
                else:
                    mask[encode_use(i + 1)] = 1
            if len(game.room) == ROOM_SIZE and not game.fled:
                mask[Action.FLEE] = 1

        elif game.phase is Phase.SHOP:
            for i, card in enumerate(game.shop_stock):
                if card.value <= game.money:
                    mask[encode_buy(i + 1)] = 1
            mask[Action.LEAVE_SHOP] = 1

        return mask

    def valid_actions(self) -> List[int]:
        return np.flatnonzero(self._action_mask()).tolist()

    def _get_observation(self) -> Dict[str, np.ndarray]:
        game = self.game
        return {
            "room": _codes(game.room, ROOM_SIZE),
            "shop": _codes(game.shop_stock, SHOP_SIZE),
            "health": np.int64(game.health),
            "money": np.int64(min(game.money, MAX_MONEY)),
            "weapon_damage": np.int64(game.weapon_damage),
            "weapon_durability": np.int64(0 if game.weapon_pristine else game.weapon_durability),
            "dungeon_size": np.int64(len(game.dungeon)),
            "bosses_left": np.int64(len(game.bosses)),
            "floor": np.int64(min(game.floor, MAX_FLOORS)),
            "phase": np.int64(game.phase),
            "fled": np.int64(game.fled),
            "action_mask": self._action_mask(),
        }

    def _info(self, **extra) -> Dict:
        info = {
            "messages": [text for _, text in self.game.drain_messages()],
            "floor": self.game.floor,
            "phase": self.game.phase.name,
        }
        info.update(extra)
        return info

    # ---------------------------- Gym interface ----------------------------- #

    def reset(self, *, seed: int | None = None, options=None):
        if seed is None and self.game is None:
            seed = self._seed
        super().reset(seed=seed)

        master_seed = int(self.np_random.integers(0, 2**32 - 1))
        self.game = Game.new(DeterministicRNG(master_seed))
        self._terminated = False
        return self._get_observation(), self._info()

    def step(self, action: int):
        if self._terminated:
            raise RuntimeError("`step()` called on terminated episode")

        action = int(action)
        if not 0 <= action < ACTION_SPACE_SIZE or not self._action_mask()[action]:
            return self._get_observation(), INVALID_ACTION_REWARD, False, False, self._info(error="Invalid action")

        game = self.game
        phase_before = game.phase
        verb, slots = decode(action)

        if verb == "use":
            game.use_card(slots[0])
        elif verb == "joker":
            game.use_card(slots[0], destroy=slots[1])
        elif verb == "flee":
            game.flee()
        elif verb == "buy":
            game.buy_card(slots[0])
        else:
            game.leave_shop()

        if phase_before is Phase.FLOOR:
            game.refresh_room()

        reward = 0.0
        if game.phase is Phase.LOST:
            reward = LOSS_REWARD
        elif game.phase is Phase.WON:
            reward = WIN_REWARD
        elif phase_before is Phase.FLOOR and game.phase is Phase.SHOP:
            reward = FLOOR_REWARD

        terminated = game.over
        self._terminated = terminated
        return self._get_observation(), reward, terminated, False, self._info()

    # ------------------------------- Render -------------------------------- #

    def render(self):
        if self.render_mode == "ansi":
            return format_game(self.game)
        if self.render_mode == "human":
            print(format_game(self.game))

    def close(self):
        pass
