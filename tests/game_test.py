import pytest

from deckcrawl_gym.constants import MAX_HEALTH, PRISTINE_DURABILITY, Phase, TextType
from deckcrawl_gym.game import Game
from deckcrawl_gym.rng import DeterministicRNG

from conftest import cards


def texts(game):
    return [text for _, text in game.drain_messages()]


def test_new_game_enters_first_floor():
    game = Game.new(DeterministicRNG(7))
    assert game.phase is Phase.FLOOR
    assert game.floor == 1
    assert game.health == MAX_HEALTH
    assert game.money == 5
    assert game.weapon_damage == 0
    assert game.weapon_durability == PRISTINE_DURABILITY
    assert not game.fled
    assert len(game.room) == 4
    assert len(game.dungeon) == 20
    assert len(game.bosses) == 8
    assert len(game.shop.pool) == 10
    assert game.messages == []


def test_new_game_shuffles_deck_then_dungeon():
    rng = DeterministicRNG(7)
    Game.new(rng)
    assert rng.history == [("deck_shuffle", "shuffle", 54), ("floor_shuffle", "shuffle", 24)]


def test_new_game_is_reproducible():
    a = Game.new(DeterministicRNG(99))
    b = Game.new(DeterministicRNG(99))
    assert a.room == b.room
    assert a.dungeon == b.dungeon


def test_output_callable_receives_lines(no_shuffle):
    seen = []
    game = Game(no_shuffle, output=lambda kind, text: seen.append((kind, text)))
    game.room = []
    game.refresh_room()
    assert seen == [(TextType.NOTIFICATION, "Restocked room")]
    assert game.messages == []


def test_start_floor_recycles_room_and_discard(make_game, no_shuffle):
    game = make_game(room=["5C", "6H"], dungeon=["7S"], health=3, weapon_damage=8, weapon_durability=6)
    game.dungeon_discard = cards("9D")
    game.start_floor()

    assert game.room == []
    assert game.dungeon_discard == []
    assert game.dungeon == cards("7S", "5C", "6H", "9D")
    assert game.health == MAX_HEALTH
    assert game.weapon_damage == 0
    assert game.weapon_durability == PRISTINE_DURABILITY
    assert no_shuffle.calls[-1] == ("floor_shuffle", 4)


def test_refresh_draws_up_to_four_from_front(make_game):
    game = make_game(room=["5C"], dungeon=["6C", "7C", "8C", "9C", "4C"])
    game.refresh_room()
    assert game.room == cards("5C", "6C", "7C", "8C")
    assert game.dungeon == cards("9C", "4C")
    assert texts(game) == ["Restocked room"]


def test_refresh_quiet(make_game):
    game = make_game(room=[], dungeon=["6C", "7C", "8C", "9C", "4C"])
    game.refresh_room(quiet=True)
    assert len(game.room) == 4
    assert texts(game) == []


def test_refresh_leaves_room_of_two(make_game):
    game = make_game(room=["5C", "6C"], dungeon=["7C"])
    game.refresh_room()
    assert game.room == cards("5C", "6C")
    assert texts(game) == []


def test_refresh_draws_what_is_left(make_game):
    game = make_game(room=[], dungeon=["7C", "8S"])
    game.refresh_room()
    assert game.room == cards("7C", "8S")
    assert game.dungeon == []
    assert game.phase is Phase.FLOOR


def test_loss_beats_floor_complete(make_game):
    game = make_game(room=["5H"], dungeon=[], health=0)
    game.refresh_room()
    assert game.phase is Phase.LOST
    assert texts(game) == ["You lost"]


def test_floor_complete_without_bosses_wins(make_game):
    game = make_game(room=["5H"], dungeon=[])
    game.refresh_room()
    assert game.phase is Phase.WON
    assert texts(game) == ["Floor complete!"]


def test_floor_complete_opens_shop(make_game):
    game = make_game(room=[], dungeon=[], bosses=["10C", "10S"], shop=["10H", "JD", "JoB", "QH", "KD"])
    game.refresh_room()
    assert game.phase is Phase.SHOP
    assert game.shop_stock == cards("10H", "JD", "JoB", "QH")
    assert game.shop.pool == cards("KD")


def test_shop_stock_limited_by_pool(make_game):
    game = make_game(room=[], dungeon=[], bosses=["10C", "10S"], shop=["10H", "JoR"])
    game.refresh_room()
    assert game.shop_stock == cards("10H", "JoR")
    assert game.shop.pool == []


def test_monster_in_room_keeps_floor_open(make_game):
    game = make_game(room=["5H", "9S"], dungeon=[], bosses=["10C", "10S"])
    game.refresh_room()
    assert game.phase is Phase.FLOOR


def test_leave_shop_releases_two_lowest_bosses(make_game, no_shuffle):
    game = make_game(
        dungeon=[], bosses=["10C", "10S", "JC", "JS"], shop=["KH"], stock=["10H", "JoB"],
        phase=Phase.SHOP, health=5,
    )
    game.dungeon_discard = cards("4C", "5C", "6H")
    game.leave_shop()

    assert game.phase is Phase.FLOOR
    assert game.floor == 2
    assert game.bosses == cards("JC", "JS")
    assert game.shop.stock == []
    assert game.shop.discard == cards("10H", "JoB")
    assert game.shop.pool == cards("KH")
    assert game.health == MAX_HEALTH
    assert game.room == cards("10C", "10S", "4C", "5C")
    assert game.dungeon == cards("6H")
    assert texts(game) == ["10♣ & 10♠ added to dungeon"]


def test_leave_shop_recycles_empty_pool(make_game, no_shuffle):
    game = make_game(bosses=["QC", "QS"], shop=[], stock=["JoR", "KD"], phase=Phase.SHOP)
    game.leave_shop()

    assert game.shop.pool == cards("JoR", "KD")
    assert game.shop.discard == []
    assert ("shop_shuffle", 2) in no_shuffle.calls
    assert texts(game)[0] == "Shop restocked"


def test_leave_shop_only_from_shop(make_game):
    game = make_game(room=["5C"])
    with pytest.raises(RuntimeError):
        game.leave_shop()


def test_complete_floor_forces_transition(make_game):
    game = make_game(room=["9S"], dungeon=["8S"], bosses=["KC", "KS"], shop=["JoB"])
    game.complete_floor()
    assert game.phase is Phase.SHOP
    assert game.shop_stock == cards("JoB")
