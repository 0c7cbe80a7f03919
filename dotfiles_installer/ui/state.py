from __future__ import annotations

from dataclasses import dataclass, field

from ..catalog import Catalog
from ..navigation import Navigator
from ..run_state import RunState
from ..selection import SelectionMap


@dataclass
class AppState:
    """Everything the screen is drawn from. Owned by the UI loop thread."""

    catalog: Catalog
    selection: SelectionMap
    navigator: Navigator
    run: RunState = field(default_factory=RunState)
    frame: int = 0

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "AppState":
        selection = SelectionMap(catalog)
        return cls(catalog=catalog, selection=selection, navigator=Navigator(catalog, selection))
