"""Match report generation for parsed Quake logs."""
import json
import logging
import sys
from typing import Mapping, Optional, TextIO

from quake_parser.state import MatchState

logger = logging.getLogger("quake_parser")


class SerializationError(ValueError):
    """Raised when a match registry cannot be rendered as a report."""


def registry_to_dict(registry: Mapping[str, MatchState]) -> dict:
    """Convert a match registry to plain report data, keeping key order."""
    return {match_key: state.to_dict() for match_key, state in registry.items()}


def generate_match_report(registry: Mapping[str, MatchState], indent: int = 2) -> str:
    """Render a match registry as indented JSON.

    Raises:
        SerializationError: If the registry holds values JSON cannot encode
    """
    try:
        return json.dumps(registry_to_dict(registry), indent=indent, ensure_ascii=False)
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Failed to serialize match report: {e}") from e


def write_match_report(registry: Mapping[str, MatchState],
                       stream: Optional[TextIO] = None,
                       indent: int = 2) -> bool:
    """Write the match report to ``stream`` (standard output by default).

    Returns:
        True if the report was written, False otherwise
    """
    stream = stream or sys.stdout
    try:
        report = generate_match_report(registry, indent=indent)
        stream.write(report + "\n")
        return True
    except (SerializationError, OSError) as e:
        logger.error(f"Failed to generate match reports. Error: {e}")
        return False
