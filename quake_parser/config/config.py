"""Configuration module for the Quake Log Parser."""
import os
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional
import dotenv

# Load environment variables from .env file if present
dotenv.load_dotenv()

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ParserConfig:
    """Configuration for the parser."""
    # Input settings
    encoding: str = "utf-8"
    show_progress: bool = True

    # Report settings
    report_indent: int = 2
    db_path: Optional[str] = None

    # Logging settings
    log_level: int = logging.INFO
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, db_path: Optional[str] = None) -> 'ParserConfig':
        """Create a configuration from environment variables."""
        return cls(
            encoding=os.environ.get("QUAKE_ENCODING", "utf-8"),
            show_progress=os.environ.get("QUAKE_SHOW_PROGRESS", "True").lower() == "true",
            report_indent=int(os.environ.get("QUAKE_REPORT_INDENT", "2")),
            db_path=db_path or os.environ.get("QUAKE_DB_PATH"),
            log_level=getattr(logging, os.environ.get("QUAKE_LOG_LEVEL", "INFO").upper(), logging.INFO),
            log_format=os.environ.get("QUAKE_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.environ.get("QUAKE_LOG_FILE"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "encoding": self.encoding,
            "show_progress": self.show_progress,
            "report_indent": self.report_indent,
            "db_path": self.db_path,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
        }


def configure_logging(config: ParserConfig) -> None:
    """Configure logging based on the configuration."""
    handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(config.log_format))
    handlers.append(console_handler)

    # File handler if log file specified
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(logging.Formatter(config.log_format))
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=config.log_level,
        handlers=handlers,
        format=config.log_format,
        force=True,
    )
