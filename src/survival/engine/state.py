"""Mutable per-player game state.

All values are strs/ints/bools/lists/dicts of those — no World references —
so this can be safely pickled for per-player persistence.
"""

from dataclasses import dataclass, field

from .world import World


@dataclass
class Player:
    """The player character."""

    current_room: str
    health: int = 100
    max_health: int = 100
    # Item ids in pickup order
    inventory: list[str] = field(default_factory=list)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def has(self, item_id: str) -> bool:
        return item_id in self.inventory

    def take_damage(self, amount: int) -> None:
        self.health = max(self.health - amount, 0)

    def heal(self, amount: int) -> int:
        """Restore health up to max_health. Returns the amount actually gained."""
        before = self.health
        self.health = min(self.health + amount, self.max_health)
        return self.health - before


@dataclass
class CreatureState:
    """Runtime health of one creature."""

    health: int
    max_health: int

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, amount: int) -> bool:
        """Apply damage, clamped at zero. Returns True if this killed it."""
        self.health = max(self.health - amount, 0)
        return not self.is_alive


@dataclass
class GameState:
    """All mutable per-player state. Holds only primitive types."""

    player: Player

    # Room contents: room_id → ids, in display order
    room_items: dict[str, list[str]] = field(default_factory=dict)
    room_creatures: dict[str, list[str]] = field(default_factory=dict)

    creatures: dict[str, CreatureState] = field(default_factory=dict)
    visited_rooms: set[str] = field(default_factory=set)

    turns: int = 0
    game_over: bool = False
    won: bool = False

    @property
    def current_room(self) -> str:
        return self.player.current_room

    def items_in(self, room_id: str) -> list[str]:
        return self.room_items.get(room_id, [])

    def creatures_in(self, room_id: str) -> list[str]:
        return self.room_creatures.get(room_id, [])

    def remove_item(self, room_id: str, item_id: str) -> bool:
        """Take an item out of a room. False if it was not there."""
        items = self.room_items.get(room_id, [])
        if item_id not in items:
            return False
        items.remove(item_id)
        return True

    def remove_creature(self, room_id: str, creature_id: str) -> bool:
        """Take a creature out of a room. False if it was not there."""
        creatures = self.room_creatures.get(room_id, [])
        if creature_id not in creatures:
            return False
        creatures.remove(creature_id)
        return True


def new_game_state(world: World) -> GameState:
    """Create a fresh game state with everything in its starting position."""
    state = GameState(
        player=Player(
            current_room=world.start_room,
            health=world.max_health,
            max_health=world.max_health,
        )
    )

    for room_id, room in world.rooms.items():
        state.room_items[room_id] = list(room.initial_items)
        state.room_creatures[room_id] = list(room.initial_creatures)

    for creature_id, creature in world.creatures.items():
        state.creatures[creature_id] = CreatureState(
            health=creature.max_health, max_health=creature.max_health
        )

    state.visited_rooms.add(world.start_room)
    return state
