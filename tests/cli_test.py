import io

import pytest

from rich.console import Console

from deckcrawl_gym.cli import Terminal, main, markup
from deckcrawl_gym.constants import Phase, TextType
from deckcrawl_gym.game import Game

from conftest import NoShuffle, cards


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


def make_terminal(commands="", debug=False, **attrs):
    term = Terminal(seed=1, debug=debug, color=False, stdin=io.StringIO(commands), stdout=io.StringIO())
    game = Game(NoShuffle(), output=term.say, prompt=term.ask)
    game.dungeon, game.bosses = [], []
    for name, value in attrs.items():
        setattr(game, name, value)
    term.game = game
    return term


def output(term):
    return term.stdout.getvalue().splitlines()


def test_use_command_refreshes_room():
    term = make_terminal(room=cards("5C", "6C"), dungeon=cards("7C", "8C", "9C"))
    assert term.handle("use 1\n")
    assert term.game.health == 7
    assert term.game.room == cards("6C", "7C", "8C", "9C")
    assert output(term) == ["Fought 5♣ barehanded, -5 HP", "Restocked room"]


@pytest.mark.parametrize("line", ["use x", "use -2"])
def test_use_needs_a_number(line):
    term = make_terminal(room=cards("5C", "6C"))
    term.handle(line)
    assert term.game.room == cards("5C", "6C")
    assert output(term) == ["Must enter a number between 1 and 4"]


def test_joker_prompt_reads_next_line():
    term = make_terminal("2\n", room=cards("JoB", "8S", "5C"))
    term.handle("use 1")
    assert term.game.room == cards("5C")
    assert term.game.money == 9
    assert output(term)[:2] == ["Choose a card to destroy:", "> Destroyed 8♠, +$4"]


def test_unknown_command():
    term = make_terminal(room=cards("5C", "6C"))
    term.handle("dance")
    assert output(term) == ["Invalid command"]


def test_debug_commands_need_flag():
    term = make_terminal(room=cards("9S"), bosses=cards("JC", "JS"))
    term.handle("win")
    assert term.game.phase is Phase.FLOOR

    term = make_terminal(debug=True, room=cards("9S"), bosses=cards("JC", "JS"))
    term.handle("win")
    assert term.game.phase is Phase.SHOP


def test_shop_commands():
    term = make_terminal(phase=Phase.SHOP, bosses=cards("JC", "JS"), money=20)
    term.game.shop.stock = cards("JoR", "QH")
    term.handle("buy 1")
    assert term.game.money == 5
    term.handle("flee")
    assert output(term)[-1] == "Invalid command"
    term.handle("continue")
    assert term.game.phase is Phase.FLOOR
    assert term.game.floor == 2
    assert cards("JC", "JS")[0] in term.game.room + term.game.dungeon


def test_retry_starts_fresh_run():
    term = make_terminal(phase=Phase.LOST, money=40)
    old = term.game
    term.handle("retry")
    assert term.game is not old
    assert term.game.phase is Phase.FLOOR
    assert term.game.money == 5


def test_quit():
    term = make_terminal(phase=Phase.WON)
    assert not term.handle("quit")


def test_run_until_quit_or_eof():
    term = Terminal(seed=4, color=False, stdin=io.StringIO("flee\nquit\n"), stdout=io.StringIO())
    term.run()
    text = term.stdout.getvalue()
    assert "Fled from room!" in text
    assert text.count("===== Dungeon (floor 1) =====") == 2

    term = Terminal(seed=4, color=False, stdin=io.StringIO(""), stdout=io.StringIO())
    term.run()


def test_markup_styles():
    assert markup(TextType.BAD, "x") == "[red]x[/]"
    assert markup(TextType.DUNGEON, "x") == "[bold rgb(0,50,75)]x[/]"
    assert markup(TextType.PLAIN, "x") == "x"
    assert markup(TextType.COMMAND, "use [card 1-4]") == "[rgb(110,110,110)]use \\[card 1-4][/]"


def test_styles_render_on_a_terminal():
    out = io.StringIO()
    console = Console(file=out, force_terminal=True, color_system="truecolor", highlight=False)
    console.print(markup(TextType.BAD, "You lost"))
    console.print(markup(TextType.COMMAND, "Commands: use [card 1-4], flee, quit"))
    text = out.getvalue()
    assert "\x1b[31mYou lost" in text
    assert "Commands: use [card 1-4], flee, quit" in text


def test_no_color_drops_colours():
    out = io.StringIO()
    term = Terminal(seed=1, color=False, stdin=io.StringIO(), stdout=out)
    term.console = Console(file=out, force_terminal=True, no_color=True, highlight=False)
    term.say(TextType.BAD, "Invalid command")
    assert out.getvalue() == "Invalid command\n"


def test_main_parses_arguments(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("quit\n"))
    assert main(["--seed", "3", "--no-color"]) == 0
    assert "===== Dungeon (floor 1) =====" in capsys.readouterr().out
