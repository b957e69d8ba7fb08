"""Xitzin application factory for Alien Planet Survival."""

from importlib import resources
from pathlib import Path

from sqlmodel import SQLModel, create_engine
from xitzin import Xitzin

from .config import Config
from .engine.loader import load_world
from .logging import get_logger

logger = get_logger(__name__)


def _get_data_path(config: Config | None = None) -> Path:
    """Locate world.json, honouring SURVIVAL_WORLD_FILE when set."""
    if config is not None and config.world_file is not None:
        return config.world_file
    return resources.files("survival") / "data" / "world.json"


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Alien Planet Survival",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    engine = create_engine(config.database_url)
    app.state.engine = engine
    app.state.config = config

    @app.on_startup
    async def startup():
        """Initialize database and load game world."""
        SQLModel.metadata.create_all(engine)
        logger.debug("database_setup_complete")

        data_path = _get_data_path(config)
        app.state.world = load_world(data_path)
        logger.info(
            "world_loaded",
            path=str(data_path),
            rooms=len(app.state.world.rooms),
            items=len(app.state.world.items),
            creatures=len(app.state.world.creatures),
        )
        logger.info("startup_complete")

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app
