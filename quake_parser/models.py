"""Database models for the Quake Log Parser."""
import logging
from typing import Dict, Mapping

from sqlalchemy import Column, Integer, String, ForeignKey, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, relationship, Session

from quake_parser.state import MatchState

logger = logging.getLogger("quake_parser")

Base = declarative_base()


class Match(Base):
    """Match table storing the totals of each parsed match."""
    __tablename__ = 'matches'

    match_id = Column(Integer, primary_key=True, autoincrement=True)
    source_file = Column(String, nullable=False, index=True)
    match_key = Column(String, nullable=False)
    total_kills = Column(Integer, nullable=False, default=0)

    # Relationships
    players = relationship("MatchPlayer", back_populates="match", cascade="all, delete-orphan",
                           order_by="MatchPlayer.player_id")
    kill_causes = relationship("KillCause", back_populates="match", cascade="all, delete-orphan",
                               order_by="KillCause.cause_id")


class MatchPlayer(Base):
    """Player table storing roster membership and victim tally per match."""
    __tablename__ = 'match_players'

    player_id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, ForeignKey('matches.match_id'), nullable=False)
    player_name = Column(String, nullable=False)
    roster_position = Column(Integer, nullable=True)  # None if never in the roster
    deaths = Column(Integer, nullable=False, default=0)
    kill_order = Column(Integer, nullable=True)  # First-death order, None if never killed
    rank = Column(Integer, nullable=True)

    # Relationships
    match = relationship("Match", back_populates="players")


class KillCause(Base):
    """Kill cause table storing how many kills each means of death caused."""
    __tablename__ = 'kill_causes'

    cause_id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, ForeignKey('matches.match_id'), nullable=False)
    cause = Column(String, nullable=False)
    kill_count = Column(Integer, nullable=False, default=0)

    # Relationships
    match = relationship("Match", back_populates="kill_causes")


def _enable_foreign_keys(dbapi_connection, connection_record):
    """Turn on SQLite foreign key enforcement for a new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def init_db(engine_url: str) -> Engine:
    """Initialize the database with the schema."""
    engine = create_engine(engine_url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(engine)
    return engine


def get_db_engine(db_path: str) -> Engine:
    """Create a SQLite database engine with the schema in place."""
    return init_db(f"sqlite:///{db_path}")


def clear_existing_matches(session: Session, source_file: str) -> int:
    """Delete every stored match that came from ``source_file``.

    Returns:
        Number of matches removed
    """
    matches = session.query(Match).filter_by(source_file=source_file).all()
    for match in matches:
        session.delete(match)
    session.flush()
    if matches:
        logger.info(f"Cleared {len(matches)} existing matches for {source_file}")
    return len(matches)


def _match_from_state(match_key: str, state: MatchState, source_file: str) -> Match:
    match = Match(source_file=source_file, match_key=match_key, total_kills=state.total_kills)

    kill_order = {name: position for position, name in enumerate(state.kills)}
    rank = {name: position for position, name in enumerate(state.ranking, start=1)}

    names = list(state.players) + [name for name in state.kills if name not in state.players]
    for name in names:
        match.players.append(MatchPlayer(
            player_name=name,
            roster_position=state.players.index(name) if name in state.players else None,
            deaths=state.kills.get(name, 0),
            kill_order=kill_order.get(name),
            rank=rank.get(name),
        ))

    for cause, count in state.kills_by_cause.items():
        match.kill_causes.append(KillCause(cause=cause, kill_count=count))

    return match


def _state_from_match(match: Match) -> MatchState:
    roster = sorted((p for p in match.players if p.roster_position is not None),
                    key=lambda p: p.roster_position)
    victims = sorted((p for p in match.players if p.kill_order is not None),
                     key=lambda p: p.kill_order)
    ranked = sorted((p for p in match.players if p.rank is not None), key=lambda p: p.rank)

    return MatchState(
        total_kills=match.total_kills,
        players=tuple(p.player_name for p in roster),
        kills={p.player_name: p.deaths for p in victims},
        kills_by_cause={c.cause: c.kill_count for c in match.kill_causes},
        ranking=tuple(p.player_name for p in ranked),
    )


def save_registry(session: Session, registry: Mapping[str, MatchState], source_file: str) -> int:
    """Store a match registry, replacing any matches from the same source file.

    Args:
        session: Database session
        registry: Mapping of match key to match state
        source_file: Name of the log file the registry was parsed from

    Returns:
        Number of matches stored

    Raises:
        SQLAlchemyError: If the database write fails; the session is rolled back
    """
    try:
        clear_existing_matches(session, source_file)
        for match_key, state in registry.items():
            session.add(_match_from_state(match_key, state, source_file))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    logger.info(f"Stored {len(registry)} matches from {source_file}")
    return len(registry)


def load_registry(session: Session, source_file: str) -> Dict[str, MatchState]:
    """Rebuild the match registry stored for ``source_file``."""
    matches = (session.query(Match)
               .filter_by(source_file=source_file)
               .order_by(Match.match_id)
               .all())
    return {match.match_key: _state_from_match(match) for match in matches}
