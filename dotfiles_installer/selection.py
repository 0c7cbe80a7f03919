from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, Iterator

from .catalog import Catalog, Step

logger = logging.getLogger(__name__)


class SelectionMap(Mapping):
    """Step id -> selected, kept in lockstep with each Step.selected.

    The map is what the plan builder reads; the Step flags are what the menu
    shows. Every mutation goes through toggle() so the two never diverge.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._steps: Dict[str, Step] = {}
        self._selected: Dict[str, bool] = {}
        for step in catalog.steps():
            self._steps[step.id] = step
            self._selected[step.id] = step.selected

    def __getitem__(self, step_id: str) -> bool:
        return self._selected[step_id]

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._selected

    def __iter__(self) -> Iterator[str]:
        return iter(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def is_active(self, step_id: str) -> bool:
        """True if the step ends up in the plan (required or selected)."""
        return self._steps[step_id].required or self._selected[step_id]

    def toggle(self, step_id: str) -> bool:
        """Flip a step's selection. Required steps are left untouched.

        Returns True if anything changed.
        """
        step = self._steps[step_id]
        if step.required:
            return False
        value = not self._selected[step_id]
        self._selected[step_id] = value
        step.selected = value
        logger.debug("Selection %s -> %s", step_id, value)
        return True

    def active_count(self) -> int:
        return sum(1 for step_id in self._selected if self.is_active(step_id))
