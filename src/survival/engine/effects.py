"""Item effects.

apply_effect(effect, state) -> str resolves one of the effect variants from
world.py against the game state. The state is always passed in explicitly.
"""

from .state import GameState
from .world import ConditionalWin, Effect, Flavor, Heal, HeldItemFlavor


def apply_effect(effect: Effect, state: GameState) -> str:
    """Apply an item's effect to the game state and return the message."""
    player = state.player
    match effect:
        case Heal(amount=amount, message=message):
            player.heal(amount)
            return message
        case Flavor(message=message):
            return message
        case HeldItemFlavor(item=item_id):
            if player.has(item_id):
                return effect.message_with
            return effect.message_without
        case ConditionalWin():
            if player.current_room != effect.room:
                return effect.wrong_room_message
            if not player.has(effect.item):
                return effect.missing_item_message
            state.won = True
            state.game_over = True
            return effect.message
    raise TypeError(f"unknown effect {effect!r}")
