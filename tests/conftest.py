"""Configuration for pytest."""
import os
import tempfile
import pytest
from pathlib import Path


@pytest.fixture
def test_data_dir():
    """Create a temporary directory for test data."""
    temp_dir = tempfile.TemporaryDirectory()
    yield Path(temp_dir.name)
    temp_dir.cleanup()


@pytest.fixture
def sample_log_lines():
    """Two matches from a Quake 3 Arena server log."""
    return [
        "  0:00 ------------------------------------------------------------",
        r"  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\sv_minRate\0\sv_hostname\Code Miner Server\g_gametype\0",
        r" 15:00 Exit: Timelimit hit.",
        r" 20:34 ClientConnect: 2",
        r" 20:34 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\xian/default\hmodel\xian/default\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100\w\0\l\0\tt\0\tl\0",
        r" 20:37 ClientBegin: 2",
        r" 20:37 ShutdownGame:",
        "  0:00 ------------------------------------------------------------",
        r"  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\sv_minRate\0\sv_hostname\Code Miner Server\g_gametype\0",
        r"  0:25 ClientUserinfoChanged: 2 n\Dono da Bola\t\0\model\sarge/krusade\hmodel\sarge/krusade\g_redteam\\g_blueteam\\c1\5\c2\5\hc\95\w\0\l\0\tt\0\tl\0",
        r"  0:27 ClientUserinfoChanged: 3 n\Mocinha\t\0\model\sarge\hmodel\sarge\g_redteam\\g_blueteam\\c1\4\c2\5\hc\95\w\0\l\0\tt\0\tl\0",
        r"  0:29 ClientUserinfoChanged: 2 n\Dono da Bola\t\0\model\sarge/krusade\hmodel\sarge/krusade\g_redteam\\g_blueteam\\c1\5\c2\5\hc\95\w\0\l\0\tt\0\tl\0",
        "  1:08 Kill: 3 2 6: Mocinha killed Dono da Bola by MOD_ROCKET",
        "  1:26 Kill: 1022 3 22: <world> killed Mocinha by MOD_TRIGGER_HURT",
        "  1:32 Kill: 1022 3 22: <world> killed Mocinha by MOD_TRIGGER_HURT",
        "  1:41 Item: 2 weapon_rocketlauncher",
        "  1:47 ShutdownGame:",
    ]


@pytest.fixture
def sample_log_file(sample_log_lines):
    """Create a sample Quake log file for testing."""
    fd, path = tempfile.mkstemp(suffix='.log')

    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        for line in sample_log_lines:
            f.write(line + "\n")

    yield path

    # Clean up
    os.unlink(path)
