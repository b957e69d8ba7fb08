"""Gameplay routes."""

from contextlib import contextmanager

from sqlmodel import Session
from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..logging import bind_player
from ..session import SurvivalSession
from ..users import get_or_create_player


@contextmanager
def _game_session(request: Request):
    """Load the player's game session with auto-close."""
    identity = get_identity(request)
    bind_player(identity.fingerprint)
    db_session = Session(request.app.state.engine)
    try:
        player = get_or_create_player(db_session, identity.fingerprint)
        world = request.app.state.world
        yield SurvivalSession.load_or_create(db_session, player, world)
    finally:
        db_session.close()


def _render_play(app: Xitzin, game: SurvivalSession, message: str = ""):
    """Render the main play view."""
    return app.template(
        "play.gmi",
        description=game.get_room_description(),
        status=game.get_status(),
        message=message,
        turns=game.state.turns,
    )


def _run(app: Xitzin, request: Request, command: str):
    """Run one command for the requesting player and render the result."""
    with _game_session(request) as game:
        message = game.process_command(command)
        game.save()
        return _render_play(app, game, message=message)


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with _game_session(request) as game:
            message = game.get_opening() if game.state.turns == 0 else ""
            game.save()
            return _render_play(app, game, message=message)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        return _run(app, request, f"go {direction}")

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        return _run(app, request, query)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        return _run(app, request, "look")

    @app.gemini("/take/{item_id}", name="take")
    @require_certificate
    def take(request: Request, item_id: str):
        """Pick up an item shown in the room."""
        return _run(app, request, f"take {item_id}")

    @app.gemini("/use/{item_id}", name="use")
    @require_certificate
    def use(request: Request, item_id: str):
        """Use a carried item."""
        return _run(app, request, f"use {item_id}")

    @app.gemini("/attack/{creature_id}", name="attack")
    @require_certificate
    def attack(request: Request, creature_id: str):
        """Attack a creature in the room."""
        return _run(app, request, f"attack {creature_id}")


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory, status, and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried items."""
        return _run(app, request, "inventory")

    @app.gemini("/status", name="status")
    @require_certificate
    def status(request: Request):
        """Show health."""
        return _run(app, request, "status")

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        with _game_session(request) as game:
            if query.strip().upper() == "YES":
                game.reset()
                game.save()
                return _render_play(app, game, message=game.get_opening())
            return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
