"""
Quake Log Parser

This package provides functionality to parse Quake 3 Arena server logs
(games.log) into per-match kill statistics, player rosters and kill-cause
tallies.
"""

__version__ = '0.1.0'
