"""Combat resolution.

One call to attack() is one exchange: the player hits once and, if the
creature survives, it hits back once.
"""

import random
from typing import Protocol

from .state import GameState
from .world import Creature, World

PLAYER_MIN_DAMAGE = 5
PLAYER_MAX_DAMAGE = 20


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def find_creature(world: World, state: GameState, target: str) -> Creature | None:
    """Find a creature in the current room by id or case-insensitive name."""
    target = target.strip().lower()
    for creature_id in state.creatures_in(state.current_room):
        creature = world.creatures.get(creature_id)
        if creature is None:
            continue
        if creature.id == target or creature.name.lower() == target:
            return creature
    return None


def _counter_attack(creature: Creature, state: GameState, rng: RandomSource) -> str:
    if not creature.is_hostile or creature.damage < 1:
        return ""
    dealt = rng.randint(1, creature.damage)
    state.player.take_damage(dealt)
    return f"{creature.name} attacks you for {dealt} damage!"


def attack(
    world: World,
    state: GameState,
    target: str,
    rng: RandomSource | None = None,
) -> str:
    """Resolve one combat exchange against the named creature."""
    rng = rng or random
    room_id = state.current_room
    if room_id not in world.rooms:
        return "You're in an unknown location."

    creature = find_creature(world, state, target)
    if creature is None:
        return f"There is no {target} here."

    creature_state = state.creatures[creature.id]
    if not creature_state.is_alive:
        return f"The {creature.name} is already dead."

    if not creature.is_hostile:
        return f"The {creature.name} is not hostile and doesn't want to fight."

    dealt = rng.randint(PLAYER_MIN_DAMAGE, PLAYER_MAX_DAMAGE)
    result = f"You attack the {creature.name} for {dealt} damage!"

    if creature_state.take_damage(dealt):
        state.remove_creature(room_id, creature.id)
        return result + f" The {creature.name} is dead!"

    counter = _counter_attack(creature, state, rng)
    if counter:
        result += "\n" + counter
    return result
