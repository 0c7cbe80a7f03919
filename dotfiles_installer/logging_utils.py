from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = str(Path(PATHS.app_log).expanduser())

_CONFIGURED_ATTR = "_dotfiles_installer_log_path"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _open_handler(log_path: str) -> logging.FileHandler:
    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_path)


def configure_logging(log_path: str = DEFAULT_LOG_PATH, level: int = logging.INFO) -> str:
    """Send the installer's own log records to a file.

    The terminal belongs to the menu while it runs, so nothing is logged to
    the console. The output of the installation run itself goes to the
    install log written by the generated script, not here.

    If the requested location is not writable, dotfiles-installer.log in the
    current directory is used instead. Calling this again keeps the first
    file. Returns the path actually in use.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = getattr(root, _CONFIGURED_ATTR, None)
    if existing:
        return existing

    chosen_path = log_path
    try:
        handler = _open_handler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "dotfiles-installer.log")
        handler = logging.FileHandler(chosen_path)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)
    setattr(root, _CONFIGURED_ATTR, chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
