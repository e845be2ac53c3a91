"""Console and file logging for shipyard.

Every module logger is a child of the `shipyard` logger. Console output is a
single RichHandler on that parent; file output is opt-in.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER = "shipyard"
LOG_FILE = Path.home() / ".local" / "state" / "shipyard" / "shipyard.log"
FALLBACK_LOG_FILE = Path("/tmp/shipyard.log")
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the `shipyard` hierarchy (typically `__name__`)."""
    _root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_verbose(verbose: bool = True):
    """Switch console logging between INFO and DEBUG."""
    _root().setLevel(logging.DEBUG if verbose else logging.INFO)


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Also write log records to a file.

    Uses ~/.local/state/shipyard/shipyard.log unless `log_file` is given,
    and /tmp/shipyard.log when that directory cannot be created. Calling
    this again returns the file already in use.
    """
    root = _root()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    target = Path(log_file) if log_file else LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target = FALLBACK_LOG_FILE

    file_handler = logging.FileHandler(target)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)
    if verbose:
        set_verbose(True)

    root.info(f"shipyard logging initialized: {target}")
    return target
