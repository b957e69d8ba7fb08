"""Parse the world.json data file into a World object.

The file has four top-level tables (rooms, items, creatures and the
start_room/max_health/title/intro scalars). Everything is validated before
the World is returned so that a broken data file fails at startup rather
than halfway through somebody's game.
"""

import json
from pathlib import Path
from typing import Any

from .world import (
    DIRECTIONS,
    ConditionalWin,
    Creature,
    Effect,
    Flavor,
    Heal,
    HeldItemFlavor,
    Item,
    Room,
    World,
)


class WorldError(ValueError):
    """Raised when the world data is inconsistent."""


def _parse_effect(item_id: str, data: dict[str, Any]) -> Effect:
    match data.get("kind"):
        case "heal":
            return Heal(amount=int(data["amount"]), message=data["message"])
        case "flavor":
            return Flavor(message=data["message"])
        case "held_item_flavor":
            return HeldItemFlavor(
                item=data["item"],
                message_with=data["message_with"],
                message_without=data["message_without"],
            )
        case "conditional_win":
            return ConditionalWin(
                room=data["room"],
                item=data["item"],
                message=data["message"],
                wrong_room_message=data["wrong_room_message"],
                missing_item_message=data["missing_item_message"],
            )
        case kind:
            raise WorldError(f"unknown effect kind {kind!r} on item {item_id}")


def _parse_item(item_id: str, data: dict[str, Any]) -> Item:
    effect_data = data.get("effect")
    return Item(
        id=item_id,
        name=data.get("name", item_id),
        description=data.get("description", ""),
        is_usable=bool(data.get("usable", False)),
        is_equippable=bool(data.get("equippable", False)),
        effect=_parse_effect(item_id, effect_data) if effect_data else None,
    )


def _parse_creature(creature_id: str, data: dict[str, Any]) -> Creature:
    return Creature(
        id=creature_id,
        name=data.get("name", creature_id),
        description=data.get("description", ""),
        max_health=int(data["health"]),
        damage=int(data.get("damage", 0)),
        is_hostile=bool(data.get("hostile", True)),
    )


def _parse_room(room_id: str, data: dict[str, Any]) -> Room:
    return Room(
        id=room_id,
        name=data.get("name", room_id),
        description=data.get("description", ""),
        image=data.get("image", ""),
        exits={d.lower(): dest for d, dest in data.get("exits", {}).items()},
        initial_items=list(data.get("items", [])),
        initial_creatures=list(data.get("creatures", [])),
    )


def _check_placement(
    kind: str,
    placed: dict[str, str],
    room: Room,
    ids: list[str],
    registry: dict,
) -> None:
    """Every id must exist and sit in exactly one room."""
    for entity_id in ids:
        if entity_id not in registry:
            raise WorldError(f"room {room.id} places unknown {kind} {entity_id}")
        if entity_id in placed:
            raise WorldError(
                f"{kind} {entity_id} placed in both {placed[entity_id]} and {room.id}"
            )
        placed[entity_id] = room.id


def _check_effect(world: World, item: Item) -> None:
    if item.is_usable and item.effect is None:
        raise WorldError(f"usable item {item.id} has no effect")
    match item.effect:
        case HeldItemFlavor(item=other) if other not in world.items:
            raise WorldError(f"effect on {item.id} refers to unknown item {other}")
        case ConditionalWin(room=room_id, item=other):
            if room_id not in world.rooms:
                raise WorldError(f"effect on {item.id} refers to unknown room {room_id}")
            if other not in world.items:
                raise WorldError(f"effect on {item.id} refers to unknown item {other}")


def validate_world(world: World) -> None:
    """Check the world graph and placements. Raises WorldError."""
    if world.start_room not in world.rooms:
        raise WorldError(f"start_room {world.start_room!r} does not exist")
    if world.max_health <= 0:
        raise WorldError("max_health must be positive")

    placed_items: dict[str, str] = {}
    placed_creatures: dict[str, str] = {}
    for room in world.rooms.values():
        for direction, dest in room.exits.items():
            if direction not in DIRECTIONS:
                raise WorldError(f"invalid exit direction {direction} in {room.id}")
            if dest not in world.rooms:
                raise WorldError(
                    f"exit {direction} in {room.id} points to unknown room {dest}"
                )
        _check_placement("item", placed_items, room, room.initial_items, world.items)
        _check_placement(
            "creature", placed_creatures, room, room.initial_creatures, world.creatures
        )

    for item_id in world.items:
        if item_id not in placed_items:
            raise WorldError(f"item {item_id} is not placed in any room")
    for creature_id in world.creatures:
        if creature_id not in placed_creatures:
            raise WorldError(f"creature {creature_id} is not placed in any room")

    for item in world.items.values():
        _check_effect(world, item)

    for creature in world.creatures.values():
        if creature.max_health <= 0:
            raise WorldError(f"creature {creature.id} must start with positive health")


def parse_world(data: dict[str, Any]) -> World:
    """Build and validate a World from already-decoded JSON data."""
    world = World(
        title=data.get("title", ""),
        intro=data.get("intro", ""),
        start_room=data.get("start_room", ""),
        max_health=int(data.get("max_health", 100)),
        rooms={k: _parse_room(k, v) for k, v in data.get("rooms", {}).items()},
        items={k: _parse_item(k, v) for k, v in data.get("items", {}).items()},
        creatures={
            k: _parse_creature(k, v) for k, v in data.get("creatures", {}).items()
        },
    )
    validate_world(world)
    return world


def load_world(data_path: Path) -> World:
    """Parse world.json and return a populated World."""
    with open(data_path, encoding="utf-8") as fh:
        return parse_world(json.load(fh))
