"""Tests for the configuration module."""
import logging

from quake_parser.config.config import ParserConfig, DEFAULT_LOG_FORMAT, configure_logging


class TestConfig:
    """Tests for ParserConfig."""

    def test_defaults(self):
        config = ParserConfig()
        assert config.encoding == "utf-8"
        assert config.show_progress is True
        assert config.report_indent == 2
        assert config.db_path is None
        assert config.log_level == logging.INFO
        assert config.log_format == DEFAULT_LOG_FORMAT

    def test_from_env(self, monkeypatch):
        """Test reading the configuration from environment variables."""
        monkeypatch.setenv("QUAKE_ENCODING", "latin-1")
        monkeypatch.setenv("QUAKE_SHOW_PROGRESS", "false")
        monkeypatch.setenv("QUAKE_REPORT_INDENT", "4")
        monkeypatch.setenv("QUAKE_DB_PATH", "env.db")
        monkeypatch.setenv("QUAKE_LOG_LEVEL", "debug")
        monkeypatch.delenv("QUAKE_LOG_FILE", raising=False)

        config = ParserConfig.from_env()
        assert config.encoding == "latin-1"
        assert config.show_progress is False
        assert config.report_indent == 4
        assert config.db_path == "env.db"
        assert config.log_level == logging.DEBUG
        assert config.log_file is None

        # Explicit database path wins over the environment
        assert ParserConfig.from_env(db_path="cli.db").db_path == "cli.db"

    def test_to_dict(self):
        config = ParserConfig(db_path="games.db")
        data = config.to_dict()
        assert data["db_path"] == "games.db"
        assert set(data) == {
            "encoding", "show_progress", "report_indent", "db_path",
            "log_level", "log_format", "log_file",
        }

    def test_configure_logging_with_file(self, test_data_dir):
        """Test that a log file handler is installed when configured."""
        log_file = test_data_dir / "parser.log"
        configure_logging(ParserConfig(log_file=str(log_file), log_level=logging.WARNING))
        try:
            logging.getLogger("quake_parser").warning("written to file")
            for handler in logging.getLogger().handlers:
                handler.flush()
            assert "written to file" in log_file.read_text()
        finally:
            root = logging.getLogger()
            for handler in list(root.handlers):
                if isinstance(handler, logging.FileHandler):
                    root.removeHandler(handler)
                    handler.close()
