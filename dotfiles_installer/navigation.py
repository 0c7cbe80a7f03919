from __future__ import annotations

from dataclasses import dataclass

from .catalog import Catalog, Category, Step
from .selection import SelectionMap


@dataclass
class Cursor:
    category: int = 0
    step: int = 0


class Navigator:
    """Cursor movement over the catalog plus toggling of the step under it.

    All moves saturate at the edges of the catalog; nothing wraps and nothing
    raises.
    """

    def __init__(self, catalog: Catalog, selection: SelectionMap) -> None:
        self.catalog = catalog
        self.selection = selection
        self.cursor = Cursor()

    @property
    def current_category(self) -> Category:
        return self.catalog.categories[self.cursor.category]

    @property
    def current_step(self) -> Step:
        return self.current_category.steps[self.cursor.step]

    def _last_step_index(self, category_index: int) -> int:
        return len(self.catalog.categories[category_index].steps) - 1

    def move_down(self) -> None:
        c = self.cursor
        if c.step < self._last_step_index(c.category):
            c.step += 1
        elif c.category < len(self.catalog) - 1:
            c.category += 1
            c.step = 0

    def move_up(self) -> None:
        c = self.cursor
        if c.step > 0:
            c.step -= 1
        elif c.category > 0:
            c.category -= 1
            c.step = self._last_step_index(c.category)

    def move_category_forward(self) -> None:
        c = self.cursor
        if c.category < len(self.catalog) - 1:
            c.category += 1
            c.step = 0

    def move_category_backward(self) -> None:
        c = self.cursor
        if c.category > 0:
            c.category -= 1
            c.step = 0

    def toggle_current(self) -> bool:
        return self.selection.toggle(self.current_step.id)
