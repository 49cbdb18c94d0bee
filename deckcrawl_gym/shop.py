# deckcrawl_gym/shop.py
# ---------------------------------------------------------------------------
# Shop subsystem: stock shown between floors, purchases, restocking
# ---------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import List, Optional

from .cards import Card, Shuffler
from .constants import SHOP_SIZE
from .errors import InvalidSlotError

logger = logging.getLogger(__name__)


class Shop:
    """Owns the three shop pools and moves cards between them.

    ``pool`` is the face-down supply, ``stock`` the (at most four) cards on
    sale, ``discard`` what went unsold. Money lives on the game, so
    :meth:`take` only hands the card over; affordability is checked by the
    caller.
    """

    def __init__(self, pool: Optional[List[Card]] = None):
        self.pool: List[Card] = list(pool) if pool is not None else []
        self.stock: List[Card] = []
        self.discard: List[Card] = []

    # ---------------- stocking --------------------------------
    def restock(self, size: int = SHOP_SIZE) -> int:
        """Move up to ``size`` cards from the pool front onto the counter."""
        amount = min(size, len(self.pool))
        for _ in range(amount):
            self.stock.append(self.pool.pop(0))
        logger.debug("shop stocked %d card(s), %d left in pool", amount, len(self.pool))
        return amount

    def close(self, rng: Shuffler) -> bool:
        """Clear the counter; refill the pool from the discard once it runs dry.

        Returns True when the pool was recycled.
        """
        self.discard.extend(self.stock)
        self.stock.clear()
        if self.pool:
            return False
        self.pool.extend(self.discard)
        self.discard.clear()
        rng.shuffle("shop_shuffle", self.pool)
        logger.debug("shop pool recycled with %d card(s)", len(self.pool))
        return True

    # ---------------- lookups ---------------------------------
    def _index(self, slot: int) -> int:
        if not 1 <= slot <= len(self.stock):
            raise InvalidSlotError("shop", slot)
        return slot - 1

    def peek(self, slot: int) -> Card:
        return self.stock[self._index(slot)]

    def price(self, slot: int) -> int:
        return self.peek(slot).value

    def take(self, slot: int) -> Card:
        return self.stock.pop(self._index(slot))

    def __len__(self) -> int:
        return len(self.pool) + len(self.stock) + len(self.discard)
