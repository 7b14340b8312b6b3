"""Flatten ads into CSV rows and write them under a dated, per-model path."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from .errors import RowError
from .models import NOT_AVAILABLE, Ad, ExportRow, SearchResult

logger = logging.getLogger(__name__)

DATA_DIR_NAME = "data"

# Parameter ids and labels as they appear in the ad's parameter groups.
MILEAGE_KEYS = frozenset({"mileage", "Miltal"})
YEAR_KEYS = frozenset({"regdate", "model_year", "year", "Modellår"})

# Where the first parameter group has historically carried the same values.
MILEAGE_POSITION = 2
YEAR_POSITION = 3


@dataclass
class ExportSummary:
    path: Path
    written: int
    skipped: int


def _find_parameter(ad: Ad, keys: frozenset, other_keys: frozenset, position: int) -> Optional[str]:
    for group in ad.parameter_groups:
        for parameter in group.parameters:
            if (parameter.id in keys or parameter.label in keys) and parameter.value:
                return parameter.value

    # Only unnamed parameters are read by position; a named one is some other field.
    if ad.parameter_groups:
        parameters = ad.parameter_groups[0].parameters
        if len(parameters) > position:
            candidate = parameters[position]
            if not candidate.id and candidate.label not in other_keys:
                return candidate.value or None
    return None


def project_row(ad: Ad) -> ExportRow:
    """Build the export row for one ad, raising :class:`RowError` if it is incomplete."""

    mileage = _find_parameter(ad, MILEAGE_KEYS, YEAR_KEYS, MILEAGE_POSITION)
    year = _find_parameter(ad, YEAR_KEYS, MILEAGE_KEYS, YEAR_POSITION)
    missing = [name for name, value in (("mileage", mileage), ("year", year)) if value is None]
    if missing:
        raise RowError(f"missing {' and '.join(missing)}", ad_id=ad.ad_id)

    price = ad.price.value if ad.price is not None else None
    municipality = ad.location[0].name if ad.location else None
    area = ad.location[1].name if len(ad.location) > 1 else None

    return ExportRow(
        subject=ad.subject or "",
        price="" if price is None else str(price),
        mileage=mileage,
        year=year,
        municipality=municipality or NOT_AVAILABLE,
        area=area or NOT_AVAILABLE,
        url=ad.share_url or "",
    )


def _safe_segment(label: str) -> str:
    segment = label.replace("/", "-").replace("\\", "-")
    # ".", ".." and hidden names must stay inside the data directory.
    if not segment or segment.startswith("."):
        segment = "-" + segment.lstrip(".")
    return segment


def export_path(outdir: Path | str, brand_name: str, model_name: str, day: date) -> Path:
    brand = _safe_segment(brand_name)
    model = _safe_segment(model_name)
    filename = f"{brand}_{model}_{day.isoformat()}.csv"
    return Path(outdir) / DATA_DIR_NAME / brand / model / filename


def _as_ad(record: Any) -> Ad:
    if isinstance(record, Ad):
        return record
    try:
        return Ad.model_validate(record)
    except ValidationError as exc:
        ad_id = record.get("ad_id") if isinstance(record, dict) else None
        raise RowError(
            f"unexpected ad shape ({exc.error_count()} error(s))", ad_id=None if ad_id is None else str(ad_id)
        ) from exc


def build_rows(records: Iterable[Any]) -> tuple[List[List[str]], int]:
    """Flatten ads into CSV rows; ads that cannot be flattened are logged and counted."""

    rows: List[List[str]] = []
    skipped = 0
    for record in records:
        try:
            rows.append(project_row(_as_ad(record)).to_csv_row())
        except RowError as exc:
            skipped += 1
            logger.warning("Skipping ad %s: %s", exc.ad_id or "<no id>", exc)
    return rows, skipped


def export_csv(
    brand_name: str,
    model_name: str,
    ads: SearchResult | Sequence[Any],
    outdir: Path | str,
    today: Optional[date] = None,
) -> ExportSummary:
    """Write ``ads`` to ``<outdir>/data/<brand>/<model>/<brand>_<model>_<date>.csv``.

    An existing file for the same brand, model and day is overwritten. Ads
    that cannot be flattened are left out and counted in ``skipped``.
    """

    records = ads.data if isinstance(ads, SearchResult) else ads
    path = export_path(outdir, brand_name, model_name, today or date.today())
    rows, skipped = build_rows(records)

    path.parent.mkdir(parents=True, exist_ok=True)
    frame = pd.DataFrame(rows, columns=ExportRow.headers())
    with path.open("w", newline="", encoding="utf-8") as handle:
        frame.to_csv(handle, index=False)

    logger.info("Wrote %d rows to %s (%d skipped)", len(rows), path, skipped)
    return ExportSummary(path=path, written=len(rows), skipped=skipped)


def dump_json(result: SearchResult) -> str:
    return json.dumps(result.model_dump(mode="json"), indent="\t", ensure_ascii=False)
