from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import NotFoundError
from .models import CategoryCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    search_parameters: str
    label: str


def select_by_label(catalog: CategoryCatalog, label: str) -> Optional[Selection]:
    """Return the catalog entry whose label equals ``label`` exactly.

    Matching is case and whitespace sensitive. When the catalog repeats a
    label the last entry wins.
    """

    selected: Optional[Selection] = None
    matches = 0
    for counter in catalog.category_counters:
        if counter.label == label:
            selected = Selection(search_parameters=counter.search_parameters, label=counter.label)
            matches += 1

    if matches > 1:
        logger.debug("Label %r occurs %d times; using the last entry", label, matches)
    return selected


def require_selection(catalog: CategoryCatalog, label: str, kind: str) -> Selection:
    selection = select_by_label(catalog, label)
    if selection is None:
        raise NotFoundError(f"{kind} '{label}' not found")
    return selection
