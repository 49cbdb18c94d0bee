# deckcrawl_gym/agents.py

import numpy as np
from typing import Any, Dict, Optional, Tuple

from deckcrawl_gym.actions import decode
from deckcrawl_gym.cards import Joker, Rank, RegularCard
from deckcrawl_gym.constants import Action, MAX_HEALTH, Phase, FACE_BONUS_PER_RANK
from deckcrawl_gym.env import DeckCrawlEnv
from deckcrawl_gym.game import Game

DEADLY = -100.0


class RandomAgent:
    """Uniformly random over the legal actions; a baseline for evaluation."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def get_action(self, obs: Dict[str, np.ndarray], env: DeckCrawlEnv) -> Tuple[int, Dict[str, Any]]:
        legal = np.flatnonzero(obs["action_mask"])
        return int(self.rng.choice(legal)), {}


class HeuristicAgent:
    """Greedy one-step player: scores every legal action and takes the best.

    Floor play roughly follows what a careful human does: pick up better
    weapons, spend the weapon on the biggest monster it can still hit, drink
    when hurt, point jokers at monsters, and run from rooms that would kill.
    In the shop it buys the most expensive card it can afford.
    """

    def get_action(self, obs: Dict[str, np.ndarray], env: DeckCrawlEnv) -> Tuple[int, Dict[str, Any]]:
        game = env.game
        legal = np.flatnonzero(obs["action_mask"]).tolist()
        if not legal:
            return int(Action.LEAVE_SHOP), {"reasoning": "no legal action"}

        if Phase(int(obs["phase"])) is Phase.SHOP:
            return self._shop_decision(game, legal)

        scored = [(self._score(game, action), action) for action in legal]
        score, action = max(scored)
        return action, {"reasoning": f"{decode(action)[0]} scored {score:.1f}"}

    # ------------------------------------------------------------------

    def _shop_decision(self, game: Game, legal) -> Tuple[int, Dict[str, Any]]:
        buys = [a for a in legal if a != Action.LEAVE_SHOP]
        if not buys:
            return int(Action.LEAVE_SHOP), {"reasoning": "nothing affordable"}
        best = max(buys, key=lambda a: game.shop_stock[decode(a)[1][0] - 1].value)
        return best, {"reasoning": "buy priciest affordable card"}

    def _score(self, game: Game, action: int) -> float:
        verb, slots = decode(action)

        if verb == "flee":
            # only beats fights that would end the run
            return DEADLY / 2

        if verb == "joker":
            target = game.room[slots[1] - 1]
            bounty = -(-target.value // 2)
            if target.is_monster:
                return float(target.value) + bounty * 0.5
            return bounty * 0.5 - 2.0

        card = game.room[slots[0] - 1]
        if isinstance(card, Joker):
            return DEADLY
        return self._score_card(game, card)

    def _score_card(self, game: Game, card: RegularCard) -> float:
        rank = int(card.rank)

        if card.is_monster:
            if game.can_wield_against(rank):
                cost = rank - game.weapon_damage
            else:
                cost = rank
            if max(cost, 0) >= game.health:
                return DEADLY
            # bigger monsters first while the weapon can still reach them
            return 10.0 - max(cost, 0) + (0.1 * rank if game.can_wield_against(rank) else 0.0)

        if card.is_potion:
            if rank >= Rank.JACK:
                gain = MAX_HEALTH + (rank - Rank.TEN) * FACE_BONUS_PER_RANK - game.health
            else:
                gain = min(game.health + rank, max(MAX_HEALTH, game.health)) - game.health
            return 2.0 * gain if gain > 0 else -1.0

        if rank >= Rank.JACK:
            return 1.0 if game.armed and not game.weapon_pristine else 0.1

        if rank > game.weapon_damage:
            return 3.0 * (rank - game.weapon_damage)
        if game.armed and not game.weapon_pristine and game.weapon_durability <= 6:
            # a fresh weaker weapon beats a worn-out one
            return 2.0
        return 0.1
