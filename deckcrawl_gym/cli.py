"""Play the dungeon in a terminal.

Usage::

    deckcrawl [--seed N] [--debug] [-v]

Floor commands: ``use <n>``, ``flee``, ``quit``. Shop commands: ``buy <n>``,
``continue``, ``quit``. After a run ends: ``retry``, ``quit``. With ``--debug``
the floor also accepts ``win`` and the shop ``steal <n>``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from .constants import Phase, TextType
from .game import SLOT_HINT, Game, parse_slot
from .render import format_game
from .rng import DeterministicRNG

logger = logging.getLogger(__name__)

STYLES = {
    TextType.NOTIFICATION: "italic rgb(110,110,110)",
    TextType.BAD: "red",
    TextType.OK: "yellow",
    TextType.GOOD: "green",
    TextType.MONEY: "rgb(200,150,25)",
    TextType.HEARTS: "rgb(200,0,0)",
    TextType.DIAMONDS: "rgb(200,75,25)",
    TextType.CLUBS: "rgb(25,100,25)",
    TextType.SPADES: "rgb(25,25,100)",
    TextType.BLACK_JOKER: "rgb(150,25,150)",
    TextType.RED_JOKER: "rgb(255,25,75)",
    TextType.DUNGEON: "bold rgb(0,50,75)",
    TextType.SHOP: "bold rgb(100,50,0)",
    TextType.LOST: "bold red",
    TextType.WON: "bold green",
    TextType.COMMAND: "rgb(110,110,110)",
}


def markup(kind: TextType, text: str) -> str:
    """Wrap ``text`` in console markup for its style."""
    style = STYLES.get(kind)
    text = escape(text)
    return f"[{style}]{text}[/]" if style else text


class Terminal:
    """Runs the read/dispatch loop against one :class:`Game` at a time."""

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        debug: bool = False,
        color: bool = True,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.seed = seed
        self.debug = debug
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.console = Console(
            file=self.stdout, no_color=not color, highlight=False, emoji=False, soft_wrap=True
        )
        self.game = self.new_game()

    def new_game(self) -> Game:
        rng = DeterministicRNG(self.seed)
        logger.debug("new run with seed %d", rng.master_seed)
        # retries continue from the next seed
        if self.seed is not None:
            self.seed += 1
        return Game.new(rng, output=self.say, prompt=self.ask)

    # ---------------- I/O ----------------------------------------------

    def say(self, kind: TextType, text: str) -> None:
        self.console.print(markup(kind, text))

    def ask(self, question: str) -> str:
        if question:
            print(question, file=self.stdout)
        print("> ", end="", file=self.stdout, flush=True)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line

    # ---------------- dispatch -----------------------------------------

    def _slot_command(self, arg: str, action: Callable[[int], bool]) -> None:
        try:
            slot = parse_slot(arg)
        except ValueError:
            self.say(TextType.BAD, SLOT_HINT)
            return
        action(slot)

    def handle(self, line: str) -> bool:
        """Apply one command line; return False when the player quits."""
        parts = line.split()
        game = self.game

        if parts == ["quit"]:
            return False

        if game.phase is Phase.FLOOR:
            match parts:
                case ["use", arg]:
                    self._slot_command(arg, game.use_card)
                case ["flee"]:
                    game.flee()
                case ["win"] if self.debug:
                    game.complete_floor()
                case _:
                    self.say(TextType.BAD, "Invalid command")
            if game.phase is Phase.FLOOR:
                game.refresh_room()

        elif game.phase is Phase.SHOP:
            match parts:
                case ["buy", arg]:
                    self._slot_command(arg, game.buy_card)
                case ["steal", arg] if self.debug:
                    self._slot_command(arg, game.steal_card)
                case ["continue"]:
                    game.leave_shop()
                case _:
                    self.say(TextType.BAD, "Invalid command")

        else:
            match parts:
                case ["retry"]:
                    self.game = self.new_game()
                case _:
                    self.say(TextType.BAD, "Invalid command")

        return True

    def run(self) -> None:
        while True:
            self.console.print(format_game(self.game, markup))
            try:
                line = self.ask("")
                if not self.handle(line):
                    break
            except EOFError:
                print(file=self.stdout)
                break


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Clear the dungeon one room at a time.")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible run")
    parser.add_argument("--debug", action="store_true", help="enable the win/steal cheat commands")
    parser.add_argument("--no-color", action="store_true", help="print without colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="log engine events to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    Terminal(seed=args.seed, debug=args.debug, color=not args.no_color).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
