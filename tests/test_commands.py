"""Tests for the command engine."""

import pytest

from survival.engine.commands import (
    DEATH_MESSAGE,
    GAME_OVER_MESSAGE,
    HELP_TEXT,
    Target,
    get_exits,
    get_opening,
    get_room_description,
    get_status,
    handle_command,
    parse_command,
)
from survival.engine.state import GameState
from survival.engine.world import World


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("go north", ("go", "north")),
        ("  TAKE   Energy   Bar  ", ("take", "energy bar")),
        ("look", ("look", "")),
        ("", ("", "")),
        ("   ", ("", "")),
    ],
)
def test_parse_command(raw, expected):
    assert parse_command(raw) == expected


def test_look(world: World, state: GameState):
    """LOOK returns the crash site with its items and exits."""
    result = handle_command(world, state, "look")
    assert result.startswith("Crash Site\n\n")
    assert "You see: Flashlight, Energy Bar" in result
    assert "Exits: north, east" in result
    assert "Creatures:" not in result


def test_look_synonym_matches_look(world: World, state: GameState):
    assert handle_command(world, state, "l") == handle_command(world, state, "LOOK")


def test_room_without_items_omits_item_line(world: World, state: GameState):
    state.room_items["crash_site"].clear()
    assert "You see:" not in get_room_description(world, state)


def test_room_without_exits(world: World, state: GameState):
    world.rooms["crash_site"].exits = {}
    assert get_room_description(world, state).endswith("There are no obvious exits.")


def test_go_direction(world: World, state: GameState):
    """Going a valid direction moves the player and describes the room."""
    result = handle_command(world, state, "go north")
    assert state.current_room == "alien_forest"
    assert "alien_forest" in state.visited_rooms
    assert result.startswith("Alien Forest")
    assert "Creatures: Xenomorph" in result


@pytest.mark.parametrize("command", ["move east", "walk e", "GO East"])
def test_movement_synonyms(world: World, state: GameState, command: str):
    handle_command(world, state, command)
    assert state.current_room == "crystal_caves"


def test_move_then_look_is_the_same_text(world: World, state: GameState):
    moved = handle_command(world, state, "go east")
    assert handle_command(world, state, "look") == moved


def test_go_blocked(world: World, state: GameState):
    result = handle_command(world, state, "go south")
    assert result == "You can't go south from here."
    assert state.current_room == "crash_site"


def test_go_without_direction(world: World, state: GameState):
    result = handle_command(world, state, "go")
    assert result.startswith("Go where?")
    assert state.current_room == "crash_site"


def test_bare_direction_is_not_a_verb(world: World, state: GameState):
    result = handle_command(world, state, "north")
    assert "don't understand" in result
    assert state.current_room == "crash_site"


def test_go_to_unknown_room_stays_put(world: World, state: GameState):
    world.rooms["crash_site"].exits["west"] = "orbit"
    result = handle_command(world, state, "go west")
    assert "unknown" in result
    assert state.current_room == "crash_site"


def test_unknown_location(world: World, state: GameState):
    state.player.current_room = "orbit"
    assert handle_command(world, state, "look") == "You're in an unknown location."
    assert "unknown location" in handle_command(world, state, "go north")
    assert "unknown location" in handle_command(world, state, "take flashlight")


def test_take_by_name(world: World, state: GameState):
    result = handle_command(world, state, "take energy bar")
    assert result == "You take the Energy Bar."
    assert state.player.inventory == ["energy_bar"]
    assert state.room_items["crash_site"] == ["flashlight"]


def test_take_by_id(world: World, state: GameState):
    handle_command(world, state, "get energy_bar")
    assert state.player.inventory == ["energy_bar"]


def test_take_twice_reports_not_here(world: World, state: GameState):
    handle_command(world, state, "take flashlight")
    result = handle_command(world, state, "take flashlight")
    assert result == "There is no flashlight here."
    assert state.player.inventory == ["flashlight"]


def test_take_missing_item(world: World, state: GameState):
    assert handle_command(world, state, "take medkit") == "There is no medkit here."


def test_take_without_target(world: World, state: GameState):
    assert handle_command(world, state, "take").startswith("Take what?")


def test_use_without_item(world: World, state: GameState):
    assert handle_command(world, state, "use medkit") == "You don't have a medkit."


def test_use_without_target(world: World, state: GameState):
    assert handle_command(world, state, "use").startswith("Use what?")


def test_use_item_not_carried_but_in_room(world: World, state: GameState):
    """Only the inventory is searched, not the room."""
    assert handle_command(world, state, "use flashlight") == "You don't have a flashlight."


def test_use_unusable_item(world: World, state: GameState):
    state.player.inventory.append("keycard")
    state.player.health = 60
    result = handle_command(world, state, "use keycard")
    assert result == "You can't use the Research Facility Keycard."
    assert state.player.inventory == ["keycard"]
    assert state.player.health == 60


def test_use_medkit_clamps(world: World, state: GameState):
    state.player.inventory.append("medkit")
    state.player.health = 90
    result = handle_command(world, state, "use Medkit")
    assert "restore 50 health" in result
    assert state.player.health == 100


def test_use_flashlight(world: World, state: GameState):
    handle_command(world, state, "take flashlight")
    result = handle_command(world, state, "use flashlight")
    assert "beam cuts through the darkness" in result


def test_use_battery_depends_on_beacon(world: World, state: GameState):
    state.player.inventory.append("battery")
    assert "nothing to use the battery with" in handle_command(world, state, "use battery")
    state.player.inventory.append("beacon")
    assert "ready to activate" in handle_command(world, state, "use power battery")
    assert not state.won


def test_attack_without_target(world: World, state: GameState):
    assert handle_command(world, state, "attack").startswith("Attack what?")


def test_attack_uses_given_random_source(world: World, state: GameState, rolls):
    state.player.current_room = "alien_forest"
    result = handle_command(world, state, "hit xenomorph", rng=rolls(10, 3))
    assert "for 10 damage" in result
    assert state.player.health == 97


def test_inventory(world: World, state: GameState):
    assert handle_command(world, state, "inventory") == "Inventory: Your inventory is empty."
    handle_command(world, state, "take flashlight")
    handle_command(world, state, "take energy bar")
    assert handle_command(world, state, "inv") == "Inventory: Flashlight, Energy Bar"


def test_status(world: World, state: GameState):
    state.player.health = 73
    assert handle_command(world, state, "hp") == "Status: Health: 73/100"


def test_help(world: World, state: GameState):
    for verb in ("help", "h", "?"):
        assert handle_command(world, state, verb) == HELP_TEXT


def test_unknown_command(world: World, state: GameState):
    result = handle_command(world, state, "dance wildly")
    assert result == "I don't understand 'dance wildly'. Type 'help' for available commands."


def test_empty_input(world: World, state: GameState):
    assert "don't understand" in handle_command(world, state, "   ")
    assert not state.game_over


def test_turns_are_counted(world: World, state: GameState):
    handle_command(world, state, "look")
    handle_command(world, state, "xyzzy")
    assert state.turns == 2


def test_death_ends_game(world: World, state: GameState, rolls):
    state.player.current_room = "alien_forest"
    state.player.health = 1
    result = handle_command(world, state, "attack xenomorph", rng=rolls(5, 15))
    assert result.endswith(DEATH_MESSAGE)
    assert state.game_over
    assert not state.won
    assert handle_command(world, state, "status") == GAME_OVER_MESSAGE


def test_game_over_short_circuits(world: World, state: GameState):
    state.game_over = True
    turns = state.turns
    assert handle_command(world, state, "go north") == GAME_OVER_MESSAGE
    assert state.current_room == "crash_site"
    assert state.turns == turns


def test_get_exits(world: World, state: GameState):
    assert get_exits(world, state) == ["north", "east"]


def test_get_status(world: World, state: GameState):
    state.player.current_room = "research_facility"
    state.player.inventory.extend(["medkit", "crystal"])
    status = get_status(world, state)
    assert status.room_name == "Abandoned Research Facility"
    assert status.image == "assets/research_facility.png"
    assert (status.health, status.max_health) == (100, 100)
    assert status.inventory == ["Medkit", "Energy Crystal"]
    assert status.exits == ["south", "east"]
    assert [t.id for t in status.takeable] == ["keycard", "datapad", "battery"]
    assert status.attackable == [Target("alien_beast", "Alien Beast")]
    assert status.usable == [Target("medkit", "Medkit")]
    assert not status.game_over


def test_peaceful_creature_is_not_attackable(world: World, state: GameState):
    state.player.current_room = "underground_tunnels"
    assert get_status(world, state).attackable == []


def test_status_in_unknown_room(world: World, state: GameState):
    state.player.current_room = "orbit"
    status = get_status(world, state)
    assert (status.room_name, status.image) == ("Unknown", "")
    assert status.exits == []


def test_opening(world: World, state: GameState):
    opening = get_opening(world, state)
    assert opening.startswith("=== ALIEN PLANET SURVIVAL ===")
    assert "Type 'help'" in opening
    assert opening.endswith(get_room_description(world, state))
