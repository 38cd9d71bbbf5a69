"""Parser module for Quake 3 server logs."""
import logging
from typing import Dict, Iterable, Iterator, Optional

from tqdm import tqdm

from quake_parser.config.config import ParserConfig
from quake_parser.extractors import (
    LineEvent, ExtractionError, classify_line, extract_player_name, extract_kill
)
from quake_parser.state import MatchState

MatchRegistry = Dict[str, MatchState]

MATCH_KEY_PREFIX = "game_"
FIRST_MATCH_ORDINAL = 1


class QuakeLogParser:
    """Parser that folds Quake log lines into per-match statistics."""

    def __init__(self, config: Optional[ParserConfig] = None):
        """Initialize the parser with the given configuration.

        Args:
            config: Parser configuration object, defaults to ``ParserConfig()``
        """
        self.config = config or ParserConfig()
        self.logger = logging.getLogger("quake_parser")

        # State of the current parse run
        self.match_ordinal = FIRST_MATCH_ORDINAL
        self.last_registry: MatchRegistry = {}

    @property
    def match_key(self) -> str:
        """Registry key of the match currently being parsed."""
        return f"{MATCH_KEY_PREFIX}{self.match_ordinal}"

    def parse_line(self, line: str, previous: MatchState) -> MatchState:
        """Apply a single log line to the state of the current match.

        A match start bumps the match ordinal and returns the empty state.
        Any failure while applying the line is logged and ``previous`` is
        returned unchanged, so this method never raises.

        Args:
            line: Raw log line
            previous: State of the current match before this line

        Returns:
            The state of the current match after this line
        """
        try:
            events = classify_line(line)

            if LineEvent.MATCH_START in events:
                self.match_ordinal += 1
                self.logger.debug(f"Match start, now parsing {self.match_key}")
                return MatchState.empty()

            state = previous

            if LineEvent.PLAYER_INFO_CHANGED in events:
                state = state.with_player(extract_player_name(line))

            if LineEvent.KILL in events:
                kill = extract_kill(line)
                state = state.with_kill(kill.victim, kill.cause)

            return state

        except ExtractionError as e:
            self.logger.warning(f"Skipping malformed line {line!r}: {e}")
            return previous
        except Exception as e:
            self.logger.error(f"Failed to parse log line {line!r}. Error: {e}")
            return previous

    def parse_lines(self, lines: Iterable[str]) -> MatchRegistry:
        """Parse an ordered sequence of log lines into a match registry.

        The match ordinal is reset at the start of every run. Each line's
        resulting state is stored under the key of the match current after the
        line was applied, so a match start lands under its new key.

        Args:
            lines: Log lines in file order, without line terminators

        Returns:
            Mapping of match key to match state, empty if the lines could not
            be read
        """
        self.match_ordinal = FIRST_MATCH_ORDINAL
        registry: MatchRegistry = {}

        try:
            for line in lines:
                current = registry.get(self.match_key, MatchState.empty())
                registry[self.match_key] = self.parse_line(line, current)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to read log lines. Error: {e}")
            registry = {}

        self.last_registry = registry
        self.logger.info(f"Parsed {len(registry)} matches")
        return registry

    def parse_file(self, file_path: str) -> MatchRegistry:
        """Parse a single Quake log file.

        Args:
            file_path: Path to the log file to parse

        Returns:
            Mapping of match key to match state, empty if the file could not
            be read
        """
        self.logger.info(f"Parsing file: {file_path}")

        try:
            with open(file_path, 'r', encoding=self.config.encoding) as f:
                return self.parse_lines(self._read_lines(f, file_path))
        except OSError as e:
            self.logger.error(f"Failed to parse log file {file_path}. Error: {e}")
            self.last_registry = {}
            return {}

    def _read_lines(self, f, file_path: str) -> Iterator[str]:
        """Yield the lines of an open log file without their terminators."""
        for line in tqdm(f, desc=f"Parsing {file_path}", unit=" lines",
                         disable=not self.config.show_progress):
            yield line.rstrip("\r\n")
