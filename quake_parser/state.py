"""Per-match statistics accumulated while parsing a Quake log."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


def rank_players(kills: Mapping[str, int]) -> Tuple[str, ...]:
    """Order players by victim tally, highest first.

    Ties keep the order in which players were first added to ``kills``.
    """
    ordered = sorted(kills.items(), key=lambda item: item[1], reverse=True)
    return tuple(player for player, _ in ordered)


@dataclass(frozen=True)
class MatchState:
    """Statistics for a single match.

    Instances are never mutated; transitions build a new state from copies of
    the previous state's containers.

    Attributes:
        total_kills: Number of kill events applied since the match started
        players: Player names in the order they first appeared
        kills: Times each player was killed (a victim tally), read-only
        kills_by_cause: Kill count per cause of death (e.g. MOD_RAILGUN), read-only
        ranking: Players sorted by ``kills`` descending, stable on ties
    """
    total_kills: int = 0
    players: Tuple[str, ...] = ()
    kills: Mapping[str, int] = field(default_factory=dict)
    kills_by_cause: Mapping[str, int] = field(default_factory=dict)
    ranking: Tuple[str, ...] = ()

    def __post_init__(self):
        # Tallies are read-only views over private copies
        object.__setattr__(self, "kills", MappingProxyType(dict(self.kills)))
        object.__setattr__(self, "kills_by_cause", MappingProxyType(dict(self.kills_by_cause)))

    @classmethod
    def empty(cls) -> 'MatchState':
        """Return the canonical empty state used at match start."""
        return cls()

    def with_player(self, player_name: str) -> 'MatchState':
        """Return a copy with ``player_name`` added to the roster."""
        if player_name in self.players:
            return self
        return MatchState(
            total_kills=self.total_kills,
            players=self.players + (player_name,),
            kills=dict(self.kills),
            kills_by_cause=dict(self.kills_by_cause),
            ranking=self.ranking,
        )

    def with_kill(self, victim: str, cause: str) -> 'MatchState':
        """Return a copy with one more kill of ``victim`` by ``cause``."""
        kills = dict(self.kills)
        kills[victim] = kills.get(victim, 0) + 1

        kills_by_cause = dict(self.kills_by_cause)
        kills_by_cause[cause] = kills_by_cause.get(cause, 0) + 1

        return MatchState(
            total_kills=self.total_kills + 1,
            players=self.players,
            kills=kills,
            kills_by_cause=kills_by_cause,
            ranking=rank_players(kills),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the state to its report form."""
        return {
            "total_kills": self.total_kills,
            "players": list(self.players),
            "kills": dict(self.kills),
            "kills_by_means": dict(self.kills_by_cause),
            "player_ranking": list(self.ranking),
        }
