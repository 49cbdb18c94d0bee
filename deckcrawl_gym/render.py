"""Text screens for a :class:`~deckcrawl_gym.game.Game`.

``stylize`` decides how a :class:`TextType` looks; the default leaves text
untouched, which is what the env's ``ansi`` render mode returns. The CLI passes
one that wraps each piece in ``rich`` console markup.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from .cards import Card, Joker, JokerColor, RegularCard, Suit
from .constants import MAX_HEALTH, Phase, TextType

Stylize = Callable[[TextType, str], str]

SUIT_STYLES = {
    Suit.HEARTS: TextType.HEARTS,
    Suit.DIAMONDS: TextType.DIAMONDS,
    Suit.CLUBS: TextType.CLUBS,
    Suit.SPADES: TextType.SPADES,
}


def plain(kind: TextType, text: str) -> str:
    return text


def card_style(card: Card) -> TextType:
    match card:
        case RegularCard(suit=suit):
            return SUIT_STYLES[suit]
        case Joker(color=JokerColor.BLACK):
            return TextType.BLACK_JOKER
        case Joker():
            return TextType.RED_JOKER


def health_style(health: int) -> TextType:
    if health <= 4:
        return TextType.BAD
    if health <= 8:
        return TextType.OK
    return TextType.GOOD


def format_card(card: Card, stylize: Stylize = plain) -> str:
    return stylize(card_style(card), str(card))


def format_game(game, stylize: Optional[Stylize] = None) -> str:
    s = stylize or plain
    lines: List[str] = []

    if game.phase is Phase.FLOOR:
        lines.append(s(TextType.DUNGEON, f"===== Dungeon (floor {game.floor}) ====="))
        lines.append(f"{len(game.dungeon)} card(s) left in Dungeon")
        lines.append(
            f"{s(health_style(game.health), f'{game.health}/{MAX_HEALTH} HP')}, "
            f"{s(TextType.MONEY, f'${game.money}')}"
        )
        lines.append("Room:" + "".join(f" {format_card(card, s)}" for card in game.room))
        if game.armed:
            weapon = f"Weapon: {s(TextType.DIAMONDS, f'{game.weapon_damage}♦')}"
            if not game.weapon_pristine:
                weapon += f" ({game.weapon_durability} durability)"
            lines.append(weapon)
        lines.append(s(TextType.COMMAND, "Commands: use [card 1-4], flee, quit"))

    elif game.phase is Phase.SHOP:
        lines.append(s(TextType.SHOP, "===== Shop ====="))
        lines.append(s(TextType.MONEY, f"${game.money}"))
        if game.shop_stock:
            lines.append("On sale:" + "".join(
                f" {format_card(card, s)}-{s(TextType.MONEY, f'${card.value}')}"
                for card in game.shop_stock
            ))
        lines.append(s(TextType.COMMAND, "Commands: buy [card 1-4], continue, quit"))

    elif game.phase is Phase.LOST:
        lines.append(s(TextType.LOST, "===== Game over ====="))
        lines.append(s(TextType.COMMAND, "Commands: retry, quit"))

    else:
        lines.append(s(TextType.WON, "===== You win! ====="))
        lines.append(s(TextType.COMMAND, "Commands: retry, quit"))

    return "\n".join(lines)
