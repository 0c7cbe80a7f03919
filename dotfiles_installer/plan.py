from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Tuple

from .catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionPlan:
    """Ordered step ids to run. Frozen once built."""

    step_ids: Tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.step_ids)

    def __len__(self) -> int:
        return len(self.step_ids)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self.step_ids


def build_plan(catalog: Catalog, selection: Mapping[str, bool]) -> ExecutionPlan:
    """Select steps in catalog order: required ones always, others if selected."""

    ids: List[str] = []
    for category in catalog.categories:
        for step in category.steps:
            if step.required or bool(selection.get(step.id, False)):
                ids.append(step.id)

    plan = ExecutionPlan(step_ids=tuple(ids))
    logger.info("Plan built (%d steps): %s", len(plan), ",".join(plan.step_ids))
    return plan
