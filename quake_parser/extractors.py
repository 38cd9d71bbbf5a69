"""Line classification and field extraction for Quake 3 server log lines."""
from enum import Enum
from typing import FrozenSet, NamedTuple

# Event markers (case-sensitive substring checks)
MATCH_START_MARKER = "InitGame"
PLAYER_INFO_MARKER = "ClientUserinfoChanged"
KILL_MARKER = "Kill"

# Delimiters around the player name in ClientUserinfoChanged lines, e.g.
#   ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\uriel/zael\...
PLAYER_NAME_START = "n\\"
PLAYER_NAME_END = "\\t"

# Delimiters around the victim and cause in Kill lines, e.g.
#   Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
VICTIM_START = "killed "
VICTIM_END = " by"
CAUSE_START = "by "


class ExtractionError(ValueError):
    """Raised when a classified line lacks the expected delimiter structure."""


class LineEvent(Enum):
    MATCH_START = "match_start"
    PLAYER_INFO_CHANGED = "player_info_changed"
    KILL = "kill"


class KillInfo(NamedTuple):
    victim: str
    cause: str


def classify_line(line: str) -> FrozenSet[LineEvent]:
    """Return the set of events a raw log line carries.

    A match start short-circuits every other check. Player info changes and
    kills are evaluated independently, so one line may carry both. Lines with
    no marker return an empty set.
    """
    if MATCH_START_MARKER in line:
        return frozenset({LineEvent.MATCH_START})

    events = set()
    if PLAYER_INFO_MARKER in line:
        events.add(LineEvent.PLAYER_INFO_CHANGED)
    if KILL_MARKER in line:
        events.add(LineEvent.KILL)
    return frozenset(events)


def extract_player_name(line: str) -> str:
    """Extract the player name from a ClientUserinfoChanged line.

    Args:
        line: Raw log line

    Returns:
        The text between the first ``n\\`` and the following ``\\t``

    Raises:
        ExtractionError: If either delimiter is missing
    """
    start = line.find(PLAYER_NAME_START)
    if start == -1:
        raise ExtractionError(f"Player name start {PLAYER_NAME_START!r} not found")
    start += len(PLAYER_NAME_START)

    end = line.find(PLAYER_NAME_END, start)
    if end == -1:
        raise ExtractionError(f"Player name end {PLAYER_NAME_END!r} not found")

    return line[start:end]


def extract_kill(line: str) -> KillInfo:
    """Extract the victim and the cause of death from a Kill line.

    The victim runs from the first ``killed `` up to the next `` by``. The
    cause is the segment after the first ``by `` in the line, ending at the
    next ``by `` if the line holds another one.

    Raises:
        ExtractionError: If a marker is missing or the markers are out of order
    """
    _, found, after_killed = line.partition(VICTIM_START)
    if not found:
        raise ExtractionError(f"Victim marker {VICTIM_START!r} not found")

    victim, found, _ = after_killed.partition(VICTIM_END)
    if not found:
        raise ExtractionError(f"Victim end marker {VICTIM_END!r} not found after {VICTIM_START!r}")

    segments = line.split(CAUSE_START)
    if len(segments) < 2:
        raise ExtractionError(f"Cause marker {CAUSE_START!r} not found")

    return KillInfo(victim=victim, cause=segments[1])
