"""deckcrawl_gym/game.py – the dungeon engine.

One :class:`Game` instance is one run: it owns every card pool, the player's
health, money and weapon, and the current :class:`~deckcrawl_gym.constants.Phase`.

Player feedback
---------------
The engine never prints. Each operation reports what happened as status lines
``(TextType, text)`` sent to the ``output`` callable given at construction, or
buffered in :attr:`Game.messages` when there is none. Rejected moves produce a
single ``TextType.BAD`` line, leave the state untouched and return ``False``.

Jokers need a second slot (the card to destroy). Callers either pass it as
``use_card(slot, destroy=n)`` or install a ``prompt`` callable that is asked
``"Choose a card to destroy:"`` and answers with the raw text the player typed.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Tuple, Union

from .cards import Card, Joker, Rank, RegularCard, Shuffler, Suit, build_deck, partition_deck
from .constants import (
    BOSSES_PER_FLOOR,
    FACE_BONUS_PER_RANK,
    HEALTH_LIMIT,
    MAX_HEALTH,
    PRISTINE_DURABILITY,
    ROOM_SIZE,
    STARTING_MONEY,
    Phase,
    TextType,
)
from .errors import InvalidSlotError
from .rng import DeterministicRNG
from .shop import Shop

logger = logging.getLogger(__name__)

Output = Callable[[TextType, str], None]
Prompt = Callable[[str], str]

SLOT_HINT = f"Must enter a number between 1 and {ROOM_SIZE}"


def parse_slot(text: Union[str, int]) -> int:
    """Parse a 1-based slot typed by the player; raise ``ValueError`` if not a number."""
    if isinstance(text, int):
        return text
    text = text.strip()
    if not text.isdecimal():
        raise ValueError(SLOT_HINT)
    return int(text)


class Game:
    def __init__(
        self,
        rng: Optional[Shuffler] = None,
        *,
        output: Optional[Output] = None,
        prompt: Optional[Prompt] = None,
    ):
        self.rng = rng if rng is not None else DeterministicRNG()
        self.output = output
        self.prompt = prompt
        self.messages: List[Tuple[TextType, str]] = []

        # deck building
        self.dungeon: List[Card]
        self.bosses: List[Card]
        self.dungeon, shop_pool, self.bosses = partition_deck(build_deck(self.rng))
        self.dungeon_discard: List[Card] = []
        self.room: List[Card] = []
        self.shop = Shop(shop_pool)

        # player
        self.health = MAX_HEALTH
        self.money = STARTING_MONEY
        self.weapon_damage = 0
        self.weapon_durability = PRISTINE_DURABILITY
        self.fled = False

        self.phase = Phase.FLOOR
        self.floor = 1

    @classmethod
    def new(cls, rng: Optional[Shuffler] = None, **kwargs) -> "Game":
        """Create a run and enter its first floor, ready for the first command."""
        game = cls(rng, **kwargs)
        game.start_floor()
        game.refresh_room(quiet=True)
        return game

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def shop_stock(self) -> List[Card]:
        return self.shop.stock

    @property
    def armed(self) -> bool:
        return self.weapon_damage > 0

    @property
    def weapon_pristine(self) -> bool:
        return self.weapon_durability >= PRISTINE_DURABILITY

    @property
    def over(self) -> bool:
        return self.phase in (Phase.LOST, Phase.WON)

    def can_wield_against(self, rank: int) -> bool:
        return self.armed and self.weapon_durability > rank

    # ------------------------------------------------------------------
    # Status lines
    # ------------------------------------------------------------------

    def emit(self, kind: TextType, text: str) -> None:
        if self.output is not None:
            self.output(kind, text)
        else:
            self.messages.append((kind, text))

    def drain_messages(self) -> List[Tuple[TextType, str]]:
        messages, self.messages = self.messages, []
        return messages

    # ------------------------------------------------------------------
    # Floors & rooms
    # ------------------------------------------------------------------

    def start_floor(self) -> None:
        self.health = MAX_HEALTH
        self.weapon_damage = 0
        self.weapon_durability = PRISTINE_DURABILITY

        self.dungeon.extend(self.room)
        self.room.clear()
        self.dungeon.extend(self.dungeon_discard)
        self.dungeon_discard.clear()
        self.rng.shuffle("floor_shuffle", self.dungeon)
        logger.debug("floor %d started with %d dungeon card(s)", self.floor, len(self.dungeon))

    def refresh_room(self, quiet: bool = False) -> None:
        """Top up a room that is down to one card, then check for loss or floor end."""
        if len(self.room) <= 1:
            amount = min(ROOM_SIZE - len(self.room), len(self.dungeon))
            for _ in range(amount):
                self.room.append(self.dungeon.pop(0))
            if amount > 0 and self.phase is Phase.FLOOR and not quiet:
                self.emit(TextType.NOTIFICATION, "Restocked room")

        if self.health <= 0:
            self.phase = Phase.LOST
            logger.debug("run lost on floor %d", self.floor)
            self.emit(TextType.BAD, "You lost")
            return

        if not self.dungeon and not any(card.is_monster for card in self.room):
            self.complete_floor()

    def complete_floor(self) -> None:
        self.emit(TextType.GOOD, "Floor complete!")
        if not self.bosses:
            self.phase = Phase.WON
        else:
            self.phase = Phase.SHOP
            self.shop.restock()
        logger.debug("floor %d complete, phase -> %s", self.floor, self.phase.name)

    def leave_shop(self) -> None:
        """Close the shop, release the next bosses and start the next floor."""
        if self.phase is not Phase.SHOP:
            raise RuntimeError(f"leave_shop() called during {self.phase.name}")

        if self.shop.close(self.rng):
            self.emit(TextType.NOTIFICATION, "Shop restocked")

        released = self.bosses[:BOSSES_PER_FLOOR]
        del self.bosses[:BOSSES_PER_FLOOR]
        self.dungeon.extend(released)
        self.emit(TextType.PLAIN, f"{' & '.join(str(card) for card in released)} added to dungeon")

        self.phase = Phase.FLOOR
        self.floor += 1
        self.start_floor()
        self.refresh_room(quiet=True)

    # ------------------------------------------------------------------
    # Room actions
    # ------------------------------------------------------------------

    def _room_index(self, slot: int) -> int:
        if not 1 <= slot <= len(self.room):
            raise InvalidSlotError("room", slot)
        return slot - 1

    def use_card(self, slot: int, destroy: Union[str, int, None] = None) -> bool:
        try:
            idx = self._room_index(slot)
        except InvalidSlotError as exc:
            self.emit(TextType.BAD, str(exc))
            return False

        card = self.room[idx]
        match card:
            case Joker():
                idx = self._destroy_with_joker(idx, destroy)
                if idx is None:
                    return False
            case RegularCard(suit=Suit.CLUBS | Suit.SPADES, rank=rank):
                self._fight(card, int(rank))
            case RegularCard(suit=Suit.HEARTS, rank=rank):
                self._drink(int(rank))
            case RegularCard(suit=Suit.DIAMONDS, rank=rank):
                self._equip(card, int(rank))

        self.dungeon_discard.append(self.room.pop(idx))
        self.fled = False
        return True

    def _destroy_with_joker(self, joker_idx: int, destroy: Union[str, int, None]) -> Optional[int]:
        """Destroy the chosen card; return the joker's index after the removal."""
        if destroy is None:
            destroy = self.prompt("Choose a card to destroy:") if self.prompt is not None else ""
        try:
            target = parse_slot(destroy)
        except ValueError:
            self.emit(TextType.BAD, SLOT_HINT)
            return None

        try:
            target_idx = self._room_index(target)
        except InvalidSlotError as exc:
            self.emit(TextType.BAD, str(exc))
            return None
        if target_idx == joker_idx:
            self.emit(TextType.BAD, "Cannot destroy itself")
            return None

        victim = self.room.pop(target_idx)
        bounty = math.ceil(victim.value / 2)
        self.money += bounty
        self.dungeon_discard.append(victim)
        self.emit(TextType.MONEY, f"Destroyed {victim}, +${bounty}")

        if target_idx < joker_idx:
            joker_idx -= 1
        return joker_idx

    def _take_damage(self, amount: int) -> None:
        self.health = max(self.health - amount, 0)

    def _fight(self, monster: Card, rank: int) -> None:
        if self.can_wield_against(rank):
            weapon = f"{self.weapon_damage}♦"
            delta = rank - self.weapon_damage
            if delta < 0:
                self.money += -delta
                self.emit(TextType.MONEY, f"Fought {monster} using {weapon}, +${-delta}")
            else:
                self._take_damage(delta)
                self.emit(TextType.BAD, f"Fought {monster} using {weapon}, -{delta} HP")
            self.weapon_durability = rank
        else:
            self._take_damage(rank)
            self.emit(TextType.BAD, f"Fought {monster} barehanded, -{rank} HP")

    def _drink(self, rank: int) -> None:
        if rank < Rank.JACK:
            # never pushes past the cap, never lowers an over-cap health
            self.health = min(self.health + rank, max(MAX_HEALTH, self.health))
            self.emit(TextType.GOOD, f"+{rank} HP")
        else:
            absorption = (rank - Rank.TEN) * FACE_BONUS_PER_RANK
            self.health = min(MAX_HEALTH + absorption, HEALTH_LIMIT)
            self.emit(TextType.GOOD, f"Full heal + {absorption} HP")

    def _equip(self, card: Card, rank: int) -> None:
        if rank < Rank.JACK:
            self.weapon_damage = rank
            self.weapon_durability = PRISTINE_DURABILITY
            self.emit(TextType.PLAIN, f"Equipped {card}")
        else:
            repair = (rank - Rank.TEN) * FACE_BONUS_PER_RANK
            if not self.weapon_pristine:
                self.weapon_durability = min(self.weapon_durability + repair, PRISTINE_DURABILITY)
            self.emit(TextType.GOOD, f"Repaired {repair} durability")

    def flee(self) -> bool:
        if len(self.room) < ROOM_SIZE:
            self.emit(TextType.BAD, "Can only flee from a full room")
            return False
        if self.fled:
            self.emit(TextType.BAD, "Cannot flee twice in a row")
            return False

        while self.room:
            self.dungeon.append(self.room.pop())
        self.fled = True
        self.emit(TextType.BAD, "Fled from room!")
        return True

    # ------------------------------------------------------------------
    # Shop actions
    # ------------------------------------------------------------------

    def buy_card(self, slot: int) -> bool:
        try:
            price = self.shop.price(slot)
        except InvalidSlotError as exc:
            self.emit(TextType.BAD, str(exc))
            return False

        if self.money < price:
            self.emit(TextType.BAD, "Can't afford card")
            return False

        self.money -= price
        card = self.shop.take(slot)
        self.dungeon.append(card)
        logger.debug("bought %s for $%d, $%d left", card, price, self.money)
        self.emit(TextType.MONEY, f"-${price}, {card} added to dungeon")
        return True

    def steal_card(self, slot: int) -> bool:
        """Debug helper: move a card from the counter to the dungeon for free."""
        try:
            card = self.shop.take(slot)
        except InvalidSlotError as exc:
            self.emit(TextType.BAD, str(exc))
            return False
        self.dungeon.append(card)
        return True
