# deckcrawl_gym/actions.py
from typing import List, Tuple

from .constants import ROOM_SIZE, SHOP_SIZE, Action

# ---------- 1. Use a room card (4 slots) ----------
NUM_USE_ACTIONS = ROOM_SIZE                  # 0–3

# ---------- 2. Joker destroys another slot (12 ordered pairs) ----------
JOKER_PAIRS: List[Tuple[int, int]] = [
    (joker, target) for joker in range(ROOM_SIZE) for target in range(ROOM_SIZE) if joker != target
]                                            # len == 12, 0-based slots
NUM_JOKER_ACTIONS = len(JOKER_PAIRS)         # 4–15

# ---------- 3. Buy from the counter (4 slots) ----------
NUM_BUY_ACTIONS = SHOP_SIZE                  # 17–20


def encode_use(slot: int) -> int:
    """slot is the 1-based room slot"""
    return Action.USE_CARD_BASE + slot - 1

def encode_joker(joker_slot: int, target_slot: int) -> int:
    """both slots 1-based and distinct"""
    return Action.JOKER_DESTROY_BASE + JOKER_PAIRS.index((joker_slot - 1, target_slot - 1))

def encode_buy(slot: int) -> int:
    return Action.BUY_CARD_BASE + slot - 1

def decode(action_id: int) -> Tuple[str, Tuple[int, ...]]:
    """Return ``(verb, 1-based slots)`` for an action id."""
    if Action.USE_CARD_BASE <= action_id < Action.USE_CARD_BASE + NUM_USE_ACTIONS:
        return "use", (action_id - Action.USE_CARD_BASE + 1,)
    if Action.JOKER_DESTROY_BASE <= action_id < Action.FLEE:
        joker, target = JOKER_PAIRS[action_id - Action.JOKER_DESTROY_BASE]
        return "joker", (joker + 1, target + 1)
    if action_id == Action.FLEE:
        return "flee", ()
    if Action.BUY_CARD_BASE <= action_id < Action.BUY_CARD_BASE + NUM_BUY_ACTIONS:
        return "buy", (action_id - Action.BUY_CARD_BASE + 1,)
    if action_id == Action.LEAVE_SHOP:
        return "continue", ()
    raise ValueError(f"Unknown action id: {action_id}")
