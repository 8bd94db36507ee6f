"""
Utility functions for the check-in automation.
"""
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from checkin.checkin_models import RunContext, TravelerCredential

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels."""
    COLORS = {
        "DEBUG": "\033[94m",      # Blue
        "INFO": "\033[92m",       # Green
        "WARNING": "\033[93m",    # Yellow
        "ERROR": "\033[91m",      # Red
        "CRITICAL": "\033[91m",   # Red
        "RESET": "\033[0m",
    }

    def format(self, record):
        log_message = super().format(record)
        if hasattr(record, 'no_color') and record.no_color:
            return log_message
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        return f"{color}{log_message}{self.COLORS['RESET']}"


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Set up logging with colored console output and an optional plain log file.

    The log file is attached to the run report, so it never gets colors.

    Args:
        verbose: If True, set log level to DEBUG
        log_file: Optional path to log file
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(ColoredFormatter(LOG_FORMAT))
    handlers = [stream_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.insert(0, file_handler)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers
    )


def make_run_id() -> str:
    """Timestamp-derived identifier shared by every file a run writes."""
    return str(int(time.time()))


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory

    Returns:
        Path object for the directory
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_artifact_path(artifact_dir: Union[str, Path], prefix: str, run_id: str,
                      attempt_number: int, extension: str) -> Path:
    """
    Build the path of a per-attempt artifact.

    Run id and attempt number are both part of the name so captures from
    different attempts never overwrite each other.
    """
    directory = ensure_directory(artifact_dir)
    extension = extension.lstrip(".")
    return directory / f"{prefix}-{run_id}-attempt{attempt_number}.{extension}"


def get_log_path(artifact_dir: Union[str, Path], run_id: str) -> Path:
    """Path of the run log inside the artifact directory."""
    return ensure_directory(artifact_dir) / f"checkin-{run_id}.log"


def format_result_message(context: "RunContext", traveler: "TravelerCredential") -> str:
    """
    Format a run outcome into a single readable log line.

    Args:
        context: The finished RunContext
        traveler: The traveler the run was for

    Returns:
        Formatted message string
    """
    status = "SUCCESS" if context.success else "FAILED"
    message = (
        f"[{status}] {traveler.first_name} {traveler.last_name} "
        f"({traveler.confirmation}) - {context.attempts_made} of {context.max_attempts} attempt(s)"
    )
    if not context.success and context.last_error:
        message += f" (Error: {context.last_error})"
    return message
