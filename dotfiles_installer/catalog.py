from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .classifier import STEP_MARKER_END

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "manifests" / "catalog.yaml"

# Step ids are called as shell functions by the generated script.
_STEP_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class CatalogError(ValueError):
    """Raised when the catalog manifest is malformed."""


@dataclass
class Step:
    id: str
    name: str
    description: str = ""
    required: bool = False
    selected: bool = False


@dataclass(frozen=True)
class Category:
    name: str
    steps: Tuple[Step, ...]


@dataclass(frozen=True)
class Catalog:
    categories: Tuple[Category, ...]

    def __len__(self) -> int:
        return len(self.categories)

    def steps(self) -> Iterator[Step]:
        """All steps in catalog order (categories first, then steps)."""
        for category in self.categories:
            yield from category.steps

    def get(self, step_id: str) -> Step:
        for step in self.steps():
            if step.id == step_id:
                return step
        raise KeyError(step_id)

    @property
    def step_count(self) -> int:
        return sum(len(c.steps) for c in self.categories)


def _as_bool(value: Any, *, field: str, where: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise CatalogError(f"{where}: '{field}' must be true/false, got {value!r}")
    return value


def _parse_step(raw: Any, *, where: str) -> Step:
    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: step must be a mapping")

    step_id = str(raw.get("id") or "").strip()
    if not _STEP_ID_RE.match(step_id):
        raise CatalogError(f"{where}: invalid step id {step_id!r}")

    name = str(raw.get("name") or "").strip()
    if not name:
        raise CatalogError(f"{where}: step {step_id} has no name")
    # Names are echoed inside the one-line step marker.
    if "\n" in name or "\r" in name or STEP_MARKER_END in name:
        raise CatalogError(f"{where}: step {step_id} name {name!r} cannot appear in a step marker")

    required = _as_bool(raw.get("required"), field="required", where=where)
    selected = _as_bool(raw.get("selected"), field="selected", where=where)

    return Step(
        id=step_id,
        name=name,
        description=str(raw.get("description") or ""),
        required=required,
        selected=selected,
    )


def catalog_from_mapping(raw: Dict[str, Any]) -> Catalog:
    """Build a Catalog from an already-parsed manifest mapping.

    Enforces the invariants the navigator and plan builder rely on:
    at least one category, no empty category, globally unique step ids.
    """

    cats_raw = raw.get("categories")
    if not isinstance(cats_raw, list) or not cats_raw:
        raise CatalogError("catalog: 'categories' must be a non-empty list")

    seen: Dict[str, str] = {}
    categories: List[Category] = []
    for ci, cat_raw in enumerate(cats_raw):
        if not isinstance(cat_raw, dict):
            raise CatalogError(f"categories[{ci}] must be a mapping")
        cat_name = str(cat_raw.get("name") or "").strip()
        if not cat_name:
            raise CatalogError(f"categories[{ci}] has no name")

        steps_raw = cat_raw.get("steps")
        if not isinstance(steps_raw, list) or not steps_raw:
            raise CatalogError(f"category {cat_name!r} must contain at least one step")

        steps: List[Step] = []
        for si, step_raw in enumerate(steps_raw):
            step = _parse_step(step_raw, where=f"{cat_name}[{si}]")
            if step.id in seen:
                raise CatalogError(
                    f"duplicate step id {step.id!r} in {cat_name!r} (already in {seen[step.id]!r})"
                )
            seen[step.id] = cat_name
            steps.append(step)

        categories.append(Category(name=cat_name, steps=tuple(steps)))

    return Catalog(categories=tuple(categories))


def load_catalog(path: Optional[str] = None) -> Catalog:
    """Load the catalog manifest (YAML). Defaults to the bundled manifest."""

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load the catalog manifest") from e

    p = Path(path) if path else DEFAULT_CATALOG_PATH
    if not p.exists():
        raise FileNotFoundError(str(p))

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog manifest must be a mapping/dict: {p}")

    catalog = catalog_from_mapping(raw)
    logger.info(
        "Catalog loaded from %s (%d categories, %d steps)", p, len(catalog), catalog.step_count
    )
    return catalog
