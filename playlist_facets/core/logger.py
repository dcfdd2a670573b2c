"""
Logging configuration for playlist-facets.

This module sets up the logging system with multiple outputs:
    - Console: Real-time messages with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - enrichment_failures.log: Tracks whose metadata could not be fetched

Everything shown on screen is also saved to file, then filtered into
specialized files.

Log File Locations:
    All log files are created in {output.directory}/logs with a timestamp
    in the file name, so every run gets its own set of files.

Usage:
    from playlist_facets.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Fetching playlist")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm

from playlist_facets.utils import ensure_directory


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Uses tqdm.write(), which prints above any active progress display
    instead of interleaving with carriage-return updates.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class EnrichmentFailedTrackHandler(logging.Handler):
    """
    Handler that captures per-track enrichment failures for the report file.

    Listens for log records carrying enrichment failure information and
    writes them to enrichment_failures.log in a simple format:

        186016-Song Title
        Request timed out after 10.0s

        186017-Another Song
        API returned code 404

    The handler looks for specific extra fields in log records:
        - 'enrichment_failed_track_id': The track ID
        - 'enrichment_failed_track_name': The track name
        - 'enrichment_failed_reason': Why the metadata fetch failed

    Only records containing these fields are written to the report.

    Attributes:
        report_path: Path to the enrichment_failures.log file.
        report_file: Open file handle (opened by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """
        Open the report file for writing.

        Called by setup_logging() after handler is created.
        File is opened in write mode (overwrites existing content).
        """
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "enrichment_failed_track_id"):
            return

        if self.report_file is None:
            return

        try:
            track_id = getattr(record, "enrichment_failed_track_id", "??")
            track_name = getattr(record, "enrichment_failed_track_name", "Unknown")
            reason = getattr(record, "enrichment_failed_reason", "")

            self.report_file.write(f"{track_id}-{track_name}\n")
            self.report_file.write(f"{reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """
        Close the report file handle.

        Safe to call multiple times.
        """
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(output_dir: Path, verbose: bool = False) -> Path:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        output_dir: Directory where log files will be created.
                    Logs are stored in a 'logs' subdirectory.
        verbose: If True, the console also shows DEBUG messages.

    Returns:
        The logs directory that was created.

    Behavior:
        1. Create output_dir/logs if it doesn't exist
        2. Configure root logger level to DEBUG, dropping old handlers
        3. Console handler (TqdmLoggingHandler), level INFO (DEBUG if verbose)
        4. Full log file handler, level DEBUG
        5. Error log file handler, filtered to ERROR+
        6. Enrichment failures report handler
    """
    logs_dir = ensure_directory(output_dir / "logs")

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    full_log_path = logs_dir / f"log_full_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"log_errors_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    failures_path = logs_dir / f"enrichment_failures_{timestamp}.log"
    failures_handler = EnrichmentFailedTrackHandler(failures_path)
    failures_handler.open()
    root_logger.addHandler(failures_handler)

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logs_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called have no
        handlers of their own and produce no console output.
    """
    return logging.getLogger(name)


def log_enrichment_failure(
    logger: logging.Logger,
    track_id: int,
    track_name: str,
    reason: str
) -> None:
    """
    Log a track whose metadata could not be fetched.

    Logs a WARNING and attaches the extra fields that
    EnrichmentFailedTrackHandler writes to enrichment_failures.log.

    Example:
        log_enrichment_failure(
            logger,
            track_id=186016,
            track_name="Song Title",
            reason="Request timed out after 10.0s"
        )
    """
    logger.warning(
        f"Failed to fetch info for track {track_id} ({track_name}): {reason}",
        extra={
            "enrichment_failed_track_id": track_id,
            "enrichment_failed_track_name": track_name,
            "enrichment_failed_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove all handlers from the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
