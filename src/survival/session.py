"""Session layer bridging the game engine and the player's saved slot.

Gemini requests are stateless, so the GameState of a game in progress is
pickled into the player's SavedGame row after every command and unpickled
on the next request. A finished game stays in the slot until reset().
"""

import datetime as dt
import pickle
import zlib

from sqlmodel import Session, select

from .engine.commands import (
    Status,
    get_exits,
    get_inventory,
    get_opening,
    get_room_description,
    get_status,
    handle_command,
)
from .engine.state import GameState, new_game_state
from .engine.world import World
from .logging import get_logger
from .models import Player, SavedGame

logger = get_logger(__name__)


def _outcome(state: GameState) -> str | None:
    if state.won:
        return "won"
    if state.game_over:
        return "died"
    return None


class SurvivalSession:
    """Wraps a Player + SavedGame + in-memory GameState."""

    def __init__(
        self,
        db_session: Session,
        player: Player,
        saved_game: SavedGame | None,
        game_state: GameState,
        world: World,
    ):
        self.db_session = db_session
        self.player = player
        self.saved_game = saved_game
        self.state = game_state
        self.world = world

    @classmethod
    def load_or_create(
        cls,
        db_session: Session,
        player: Player,
        world: World,
    ) -> "SurvivalSession":
        """Load the player's open game or start a fresh one."""
        statement = select(SavedGame).where(SavedGame.player_id == player.id)
        saved_game = db_session.exec(statement).first()

        if saved_game is not None:
            game_state = pickle.loads(zlib.decompress(saved_game.state_blob))
            logger.debug("game_loaded", turns=saved_game.turns)
        else:
            game_state = new_game_state(world)
            logger.info("new_game_started", room=game_state.current_room)

        return cls(db_session, player, saved_game, game_state, world)

    @property
    def is_finished(self) -> bool:
        return self.state.game_over

    def process_command(self, raw_input: str) -> str:
        """Delegate to the engine and return response text."""
        was_over = self.state.game_over
        result = handle_command(self.world, self.state, raw_input)
        logger.debug(
            "command_processed",
            command=raw_input.strip(),
            room=self.state.current_room,
            health=self.state.player.health,
            turns=self.state.turns,
        )
        if self.state.game_over and not was_over:
            if self.state.won:
                logger.info("game_won", turns=self.state.turns)
            else:
                logger.info("player_died", turns=self.state.turns)
        return result

    def save(self) -> None:
        """Serialize state back to the database."""
        now = dt.datetime.now(dt.UTC)
        blob = zlib.compress(pickle.dumps(self.state))

        if self.saved_game is None:
            self.saved_game = SavedGame(
                player_id=self.player.id,
                state_blob=blob,
                started_at=now,
            )
            self.db_session.add(self.saved_game)
        else:
            self.saved_game.state_blob = blob

        self.saved_game.turns = self.state.turns
        self.saved_game.health = self.state.player.health
        self.saved_game.is_finished = self.state.game_over
        self.saved_game.outcome = _outcome(self.state)
        self.saved_game.last_played = now

        self.db_session.commit()
        logger.debug(
            "game_saved",
            turns=self.state.turns,
            finished=self.state.game_over,
        )

    def get_room_description(self) -> str:
        return get_room_description(self.world, self.state)

    def get_exits(self) -> list[str]:
        return get_exits(self.world, self.state)

    def get_inventory(self) -> list[str]:
        return get_inventory(self.world, self.state)

    def get_status(self) -> Status:
        return get_status(self.world, self.state)

    def get_opening(self) -> str:
        return get_opening(self.world, self.state)

    def reset(self) -> None:
        """Throw away the current game and start a fresh one."""
        self.state = new_game_state(self.world)
        if self.saved_game:
            self.db_session.delete(self.saved_game)
            self.db_session.commit()
            self.saved_game = None
        logger.info("game_reset")
