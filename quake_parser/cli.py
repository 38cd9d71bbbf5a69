"""Command-line interface for the Quake Log Parser."""
import logging
import sys
from pathlib import Path

import click
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .config.config import ParserConfig, configure_logging
from .parser import QuakeLogParser
from .report import write_match_report
from .models import Match, get_db_engine, save_registry

logger = logging.getLogger(__name__)


@click.group()
@click.version_option()
def main():
    """Quake 3 Arena Log Parser CLI."""
    pass


@main.command()
@click.argument("log_file", type=click.Path(exists=True, readable=True, dir_okay=False))
@click.option("--output", "-o", help="Write the JSON report to this file instead of stdout", default=None)
@click.option("--db", "db_path", help="Also store the matches in this SQLite database", default=None)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress display")
def parse(log_file, output, db_path, verbose, quiet):
    """Parse a Quake log file into a per-match report."""
    config = ParserConfig.from_env(db_path=db_path)
    config.show_progress = config.show_progress and not quiet
    if verbose:
        config.log_level = logging.DEBUG

    configure_logging(config)

    logger.info(f"Parsing log file: {log_file}")

    parser = QuakeLogParser(config)
    registry = parser.parse_file(log_file)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                written = write_match_report(registry, f, indent=config.report_indent)
        except OSError as e:
            logger.error(f"Failed to write report to {output}: {e}")
            sys.exit(1)
        if written:
            logger.info(f"Wrote report for {len(registry)} matches to {output}")
    else:
        written = write_match_report(registry, sys.stdout, indent=config.report_indent)

    if not written:
        sys.exit(1)

    if config.db_path:
        logger.info(f"Output database: {config.db_path}")
        try:
            Session = sessionmaker(bind=get_db_engine(config.db_path))
            with Session() as session:
                save_registry(session, registry, Path(log_file).name)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store matches in {config.db_path}: {e}")
            sys.exit(1)


@main.command()
@click.argument("db_file", type=click.Path(exists=True, readable=True, dir_okay=False))
def info(db_file):
    """Display the matches stored in a parsed Quake database."""
    try:
        engine = create_engine(f"sqlite:///{db_file}")
        if not inspect(engine).has_table(Match.__tablename__):
            click.echo("No matches found in database")
            sys.exit(1)

        Session = sessionmaker(bind=engine)
        with Session() as session:
            matches = session.query(Match).order_by(Match.match_id).all()

            if not matches:
                click.echo("No matches found in database")
                sys.exit(1)

            click.echo(f"Found {len(matches)} matches in database:")
            for match in matches:
                click.echo(f"\nMatch: {match.match_key}")
                click.echo(f"Source file: {match.source_file}")
                click.echo(f"Total kills: {match.total_kills}")

                click.echo(f"\nPlayers ({len(match.players)}):")
                click.echo("  Rank  Player               Deaths")
                click.echo("  ---------------------------------")
                ranked = sorted(match.players,
                                key=lambda p: (p.rank is None, p.rank or 0, p.player_id))
                for player in ranked:
                    rank = str(player.rank) if player.rank is not None else "-"
                    click.echo(f"  {rank:>4}  {player.player_name:<20} {player.deaths:6}")

                if match.kill_causes:
                    click.echo("\nKills by means:")
                    for cause in match.kill_causes:
                        click.echo(f"  {cause.cause:<25} {cause.kill_count:6}")

    except SQLAlchemyError as e:
        click.echo(f"Error reading database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
