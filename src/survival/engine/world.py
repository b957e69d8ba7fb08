"""Immutable data structures for the game world.

These are loaded once from world.json at startup and shared across all players.
Nothing in here changes during play; see state.py for the mutable side.
"""

from dataclasses import dataclass, field

DIRECTIONS = ("north", "south", "east", "west")


@dataclass(frozen=True)
class Heal:
    """Restore a fixed amount of health, clamped to the player's maximum."""

    amount: int
    message: str


@dataclass(frozen=True)
class Flavor:
    """Print a message and change nothing."""

    message: str


@dataclass(frozen=True)
class HeldItemFlavor:
    """Message depends on whether another item is being carried."""

    item: str
    message_with: str
    message_without: str


@dataclass(frozen=True)
class ConditionalWin:
    """Win the game when used in `room` while carrying `item`."""

    room: str
    item: str
    message: str
    wrong_room_message: str
    missing_item_message: str


Effect = Heal | Flavor | HeldItemFlavor | ConditionalWin


@dataclass(frozen=True)
class Item:
    """A collectible object. The same Item is moved around, never copied."""

    id: str
    name: str
    description: str = ""
    is_usable: bool = False
    is_equippable: bool = False  # declared by the data, no rule reads it yet
    effect: Effect | None = None


@dataclass(frozen=True)
class Creature:
    """Template for a creature. Runtime health lives in GameState."""

    id: str
    name: str
    description: str = ""
    max_health: int = 1
    damage: int = 0
    is_hostile: bool = True


@dataclass
class Room:
    """A location in the game world."""

    id: str
    name: str
    description: str = ""
    image: str = ""
    # direction → destination room id, in declaration order
    exits: dict[str, str] = field(default_factory=dict)
    initial_items: list[str] = field(default_factory=list)
    initial_creatures: list[str] = field(default_factory=list)


@dataclass
class World:
    """The complete immutable game world, loaded from world.json."""

    title: str = ""
    intro: str = ""
    start_room: str = ""
    max_health: int = 100
    rooms: dict[str, Room] = field(default_factory=dict)
    items: dict[str, Item] = field(default_factory=dict)
    creatures: dict[str, Creature] = field(default_factory=dict)
