from .app import InstallerApp
from .render import render
from .state import AppState

__all__ = [
    "AppState",
    "InstallerApp",
    "render",
]
