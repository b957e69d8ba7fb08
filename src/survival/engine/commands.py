"""Command dispatch and handler functions.

handle_command(world, state, raw_input) -> str is the main entry point.
It tokenizes, dispatches on the first word, and checks end conditions.
All handlers mutate state in place and return descriptive text.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from . import combat
from .effects import apply_effect
from .state import GameState
from .world import DIRECTIONS, World

GAME_OVER_MESSAGE = "The game is over. Start a new game to play again."
DEATH_MESSAGE = "You have died! GAME OVER."
UNKNOWN_LOCATION = "You're in an unknown location."

DIRECTION_ALIASES = {d[0]: d for d in DIRECTIONS}

HELP_TEXT = """Available commands:
- go/move/walk [direction] - Move in a direction (north, south, east, west)
- look/l - Look around the current area
- take/get [item] - Pick up an item
- use [item] - Use an item from your inventory
- attack/fight/hit [creature] - Attack a creature
- inventory/inv/i - Check your inventory
- status/health/hp - Check your health status
- help/h/? - Show this help text

Your goal: Survive the alien creatures and find a way to call for rescue!"""


@dataclass(frozen=True)
class Target:
    """Something a context action can point at."""

    id: str
    name: str


@dataclass
class Status:
    """Snapshot of what the front end shows next to the command output."""

    room_name: str
    health: int
    max_health: int
    image: str = ""
    inventory: list[str] = field(default_factory=list)
    exits: list[str] = field(default_factory=list)
    takeable: list[Target] = field(default_factory=list)
    attackable: list[Target] = field(default_factory=list)
    usable: list[Target] = field(default_factory=list)
    game_over: bool = False
    won: bool = False


def parse_command(raw_input: str) -> tuple[str, str]:
    """Split input into (verb, argument), both trimmed and lower-cased."""
    words = raw_input.strip().lower().split(None, 1)
    if not words:
        return "", ""
    verb = words[0]
    argument = " ".join(words[1].split()) if len(words) > 1 else ""
    return verb, argument


def handle_command(
    world: World,
    state: GameState,
    raw_input: str,
    rng: combat.RandomSource | None = None,
) -> str:
    """Process a command and return the response text."""
    if state.game_over:
        return GAME_OVER_MESSAGE

    state.turns += 1
    verb, argument = parse_command(raw_input)

    handler = _VERB_DISPATCH.get(verb)
    if handler is None:
        result = (
            f"I don't understand '{raw_input.strip()}'. "
            "Type 'help' for available commands."
        )
    elif handler is _cmd_attack:
        result = _cmd_attack(world, state, argument, rng)
    else:
        result = handler(world, state, argument)

    death = _check_conditions(state)
    if death:
        return result + "\n\n" + death
    return result


def _check_conditions(state: GameState) -> str | None:
    """Flag the game as over if the player died. Win is set by the beacon."""
    if not state.player.is_alive and not state.game_over:
        state.game_over = True
        return DEATH_MESSAGE
    return None


# --- Room rendering ---


def get_room_description(world: World, state: GameState) -> str:
    """Describe the current room: name, text, items, creatures, exits."""
    room = world.rooms.get(state.current_room)
    if room is None:
        return UNKNOWN_LOCATION

    desc = f"{room.name}\n\n{room.description}"

    items = get_visible_items(world, state)
    if items:
        desc += "\n\nYou see: " + ", ".join(items)

    creatures = get_visible_creatures(world, state)
    if creatures:
        desc += "\n\nCreatures: " + ", ".join(creatures)

    exits = get_exits(world, state)
    if exits:
        desc += "\n\nExits: " + ", ".join(exits)
    else:
        desc += "\n\nThere are no obvious exits."
    return desc


def get_visible_items(world: World, state: GameState) -> list[str]:
    """Names of the items lying in the current room."""
    return [
        world.items[item_id].name
        for item_id in state.items_in(state.current_room)
        if item_id in world.items
    ]


def get_visible_creatures(world: World, state: GameState) -> list[str]:
    """Names of the creatures in the current room."""
    return [
        world.creatures[creature_id].name
        for creature_id in state.creatures_in(state.current_room)
        if creature_id in world.creatures
    ]


def get_exits(world: World, state: GameState) -> list[str]:
    """Available exit directions for the current room."""
    room = world.rooms.get(state.current_room)
    if room is None:
        return []
    return list(room.exits)


def get_inventory(world: World, state: GameState) -> list[str]:
    """Names of carried items, in pickup order."""
    return [
        world.items[item_id].name
        for item_id in state.player.inventory
        if item_id in world.items
    ]


def get_status(world: World, state: GameState) -> Status:
    """Build the status snapshot for the current turn."""
    room = world.rooms.get(state.current_room)
    player = state.player

    takeable = [
        Target(item_id, world.items[item_id].name)
        for item_id in state.items_in(state.current_room)
        if item_id in world.items
    ]
    attackable = []
    for creature_id in state.creatures_in(state.current_room):
        creature = world.creatures.get(creature_id)
        if creature and creature.is_hostile and state.creatures[creature_id].is_alive:
            attackable.append(Target(creature_id, creature.name))
    usable = [
        Target(item_id, world.items[item_id].name)
        for item_id in player.inventory
        if item_id in world.items and world.items[item_id].is_usable
    ]

    return Status(
        room_name=room.name if room else "Unknown",
        health=player.health,
        max_health=player.max_health,
        image=room.image if room else "",
        inventory=get_inventory(world, state),
        exits=get_exits(world, state),
        takeable=takeable,
        attackable=attackable,
        usable=usable,
        game_over=state.game_over,
        won=state.won,
    )


def get_opening(world: World, state: GameState) -> str:
    """Text shown when a new game starts."""
    parts = []
    if world.title:
        parts.append(f"=== {world.title.upper()} ===")
    if world.intro:
        parts.append(world.intro)
    parts.append(get_room_description(world, state))
    return "\n\n".join(parts)


# --- Handlers ---


def _resolve_item(world: World, item_ids: list[str], target: str) -> str | None:
    """Find an item id among item_ids, matching id first, then name."""
    if target in item_ids:
        return target
    for item_id in item_ids:
        item = world.items.get(item_id)
        if item and item.name.lower() == target:
            return item_id
    return None


def _cmd_go(world: World, state: GameState, direction: str) -> str:
    """Handle GO/MOVE/WALK commands."""
    if not direction:
        return "Go where? Specify a direction (north, south, east, west)."

    room = world.rooms.get(state.current_room)
    if room is None:
        return UNKNOWN_LOCATION

    direction = DIRECTION_ALIASES.get(direction, direction)
    dest = room.exits.get(direction)
    if dest is None:
        return f"You can't go {direction} from here."
    if dest not in world.rooms:
        return "That way leads somewhere unknown. You stay where you are."

    state.player.current_room = dest
    state.visited_rooms.add(dest)
    return get_room_description(world, state)


def _cmd_look(world: World, state: GameState, argument: str = "") -> str:
    """Handle LOOK command."""
    return get_room_description(world, state)


def _cmd_take(world: World, state: GameState, target: str) -> str:
    """Handle TAKE/GET commands."""
    if not target:
        return "Take what? Specify an item name."
    if state.current_room not in world.rooms:
        return UNKNOWN_LOCATION

    item_id = _resolve_item(world, state.items_in(state.current_room), target)
    if item_id is None or not state.remove_item(state.current_room, item_id):
        return f"There is no {target} here."

    state.player.inventory.append(item_id)
    return f"You take the {world.items[item_id].name}."


def _cmd_use(world: World, state: GameState, target: str) -> str:
    """Handle USE command."""
    if not target:
        return "Use what? Specify an item name."

    item_id = _resolve_item(world, state.player.inventory, target)
    if item_id is None:
        return f"You don't have a {target}."

    item = world.items[item_id]
    if not item.is_usable or item.effect is None:
        return f"You can't use the {item.name}."
    return apply_effect(item.effect, state)


def _cmd_attack(
    world: World,
    state: GameState,
    target: str,
    rng: combat.RandomSource | None = None,
) -> str:
    """Handle ATTACK/FIGHT/HIT commands."""
    if not target:
        return "Attack what? Specify a creature name."
    return combat.attack(world, state, target, rng)


def _cmd_inventory(world: World, state: GameState, argument: str = "") -> str:
    """Handle INVENTORY command."""
    items = get_inventory(world, state)
    if not items:
        return "Inventory: Your inventory is empty."
    return "Inventory: " + ", ".join(items)


def _cmd_status(world: World, state: GameState, argument: str = "") -> str:
    """Handle STATUS command."""
    player = state.player
    if not player.is_alive:
        return "Status: You are dead."
    return f"Status: Health: {player.health}/{player.max_health}"


def _cmd_help(world: World, state: GameState, argument: str = "") -> str:
    """Handle HELP command."""
    return HELP_TEXT


_VERB_DISPATCH: dict[str, Callable[..., str]] = {
    **dict.fromkeys(("go", "move", "walk"), _cmd_go),
    **dict.fromkeys(("look", "l"), _cmd_look),
    **dict.fromkeys(("take", "get"), _cmd_take),
    "use": _cmd_use,
    **dict.fromkeys(("attack", "fight", "hit"), _cmd_attack),
    **dict.fromkeys(("inventory", "inv", "i"), _cmd_inventory),
    **dict.fromkeys(("status", "health", "hp"), _cmd_status),
    **dict.fromkeys(("help", "h", "?"), _cmd_help),
}
