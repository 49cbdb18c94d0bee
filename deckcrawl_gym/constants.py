"""Centralised enumerations and rule constants for DeckCrawl Gym
==============================================================

This module replaces scattered *magic integers* with explicit `IntEnum`
classes and named constants. Import these everywhere instead of raw numbers:

1. **Safety** – your IDE & `mypy` will scream when you pass the wrong kind of
   integer.
2. **Readability** – `Action.FLEE` is self‑explanatory; `16` is not.

Usage (env excerpt)
-------------------
```python
from deckcrawl_gym.constants import Action, Phase

if self.game.phase is Phase.FLOOR:
    if action == Action.FLEE:
        ...
    elif Action.USE_CARD_BASE <= action < Action.USE_CARD_BASE + ROOM_SIZE:
        slot = action - Action.USE_CARD_BASE + 1
        ...
```
"""

from __future__ import annotations
from enum import Enum, IntEnum, auto, unique

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

MAX_HEALTH = 12          # health restored at the start of every floor
HEALTH_LIMIT = 255       # hard ceiling, only reachable in theory
STARTING_MONEY = 5
ROOM_SIZE = 4
SHOP_SIZE = 4
BOSSES_PER_FLOOR = 2
PRISTINE_DURABILITY = 255  # weapon that has not fought yet
JOKER_VALUE = 15
FACE_BONUS_PER_RANK = 2  # full-heal absorption and repair amount per rank above ten


@unique
class Phase(IntEnum):
    """High‑level game phases."""
    FLOOR = 0
    SHOP = 1
    LOST = 2
    WON = 3


@unique
class Action(IntEnum):
    """Flat action space (0‑21) with *base* offsets for parameterised actions.

    For ranges (e.g. *use room slot 1‑4*) we expose **BASE** constants; the
    widths live in :mod:`deckcrawl_gym.actions`.
    """
    # === Floor phase ===
    USE_CARD_BASE: int = 0       # room slots 1‑4 → 0‑3
    JOKER_DESTROY_BASE: int = 4  # 12 (joker, target) pairs → 4‑15
    FLEE: int = 16

    # === Shop phase ===
    BUY_CARD_BASE: int = 17      # shop slots 1‑4 → 17‑20
    LEAVE_SHOP: int = 21


ACTION_SPACE_SIZE = 22


class TextType(Enum):
    """Category of a piece of text; only used to pick a display style.

    The first six tag engine status lines, the rest are used when rendering
    cards and screens.
    """
    NOTIFICATION = auto()
    BAD = auto()
    OK = auto()
    GOOD = auto()
    MONEY = auto()
    PLAIN = auto()

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()
    BLACK_JOKER = auto()
    RED_JOKER = auto()
    DUNGEON = auto()
    SHOP = auto()
    LOST = auto()
    WON = auto()
    COMMAND = auto()


__all__ = [
    "MAX_HEALTH",
    "HEALTH_LIMIT",
    "STARTING_MONEY",
    "ROOM_SIZE",
    "SHOP_SIZE",
    "BOSSES_PER_FLOOR",
    "PRISTINE_DURABILITY",
    "JOKER_VALUE",
    "FACE_BONUS_PER_RANK",
    "Phase",
    "Action",
    "ACTION_SPACE_SIZE",
    "TextType",
]
