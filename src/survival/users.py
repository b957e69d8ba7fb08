"""Player lookup by client certificate."""

import datetime as dt

from sqlmodel import Session, select

from .logging import get_logger
from .models import Player

logger = get_logger(__name__)


def get_player(session: Session, fingerprint: str) -> Player | None:
    statement = select(Player).where(Player.fingerprint == fingerprint)
    return session.exec(statement).first()


def get_or_create_player(session: Session, fingerprint: str) -> Player:
    """Return the player for this certificate, registering it on first visit."""
    player = get_player(session, fingerprint)

    if player is None:
        player = Player(fingerprint=fingerprint)
        session.add(player)
        logger.info("player_registered", fingerprint=fingerprint)
    else:
        player.last_seen = dt.datetime.now(dt.UTC)

    session.commit()
    session.refresh(player)
    return player
