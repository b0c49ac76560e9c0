"""
Tabular catalog import.

Reads CSV, JSON / JSONL and Parquet files with pandas and turns each row into
a ``Song``. Rows with an unusable year or duration are counted as invalid,
rows whose id is already in the catalog are counted as duplicates, and both
are skipped so one bad line does not abort the whole import.

Expected columns: ``title``, ``artist``, ``genre``, ``year``; optional
``id`` (a UUID is generated when blank) and ``duration_seconds``
(``duration`` is accepted as an alias).
"""

from __future__ import annotations
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pandas as pd
from loguru import logger

from songgraph.catalog.song import Song
from songgraph.catalog.song_catalog import SongCatalog
from songgraph.errors import CatalogImportError

REQUIRED_COLUMNS = ("title", "artist", "genre", "year")


def _clean(value: Any) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    # pandas widens integer columns with gaps to float64
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _to_int(value: Any, default: Optional[int] = None) -> int:
    text = _clean(value)
    if not text:
        if default is None:
            raise ValueError("missing value")
        return default
    return int(float(text))


def row_to_song(row: Dict[str, Any]) -> Song:
    """
    Build a ``Song`` from one parsed row.

    Raises:
        ValueError: If ``year`` or ``duration_seconds`` is not numeric.
    """
    song_id = _clean(row.get("id")) or str(uuid.uuid4())
    duration = row.get("duration_seconds", row.get("duration"))

    return Song(
        id=song_id,
        title=_clean(row.get("title")) or "Untitled",
        artist=_clean(row.get("artist")) or None,
        genre=_clean(row.get("genre")) or None,
        year=_to_int(row.get("year")),
        duration_seconds=_to_int(duration, default=0),
    )


def read_catalog_file(path: str | Path) -> pd.DataFrame:
    """
    Read a catalog file into a DataFrame.

    Raises:
        CatalogImportError: For unknown extensions or unreadable files.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".csv":
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        if suffix == ".jsonl":
            return pd.read_json(path, lines=True, dtype=False)
        if suffix == ".json":
            return pd.read_json(path, dtype=False)
        if suffix == ".parquet":
            return pd.read_parquet(path)
    except (OSError, ValueError) as e:
        raise CatalogImportError(f"Could not read {path}: {e}") from e

    raise CatalogImportError(f"Unsupported catalog format: {path.suffix or path.name}")


def import_dataframe(df: pd.DataFrame, catalog: SongCatalog,
                     on_import: Optional[Callable[[Song], Any]] = None) -> Dict[str, Any]:
    """
    Import every row of ``df`` into ``catalog``.

    Args:
        df: Parsed catalog rows
        catalog: Target catalog
        on_import: Called with each newly saved song, e.g. to connect it
            into the similarity graph

    Returns:
        Import report with ``imported``, ``duplicates``, ``invalid`` counts
        and the ``song_ids`` that were added
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogImportError(f"Missing required columns: {', '.join(missing)}")

    report = {"imported": 0, "duplicates": 0, "invalid": 0, "song_ids": []}

    for line_no, row in enumerate(df.to_dict(orient="records"), 1):
        try:
            song = row_to_song(row)
        except (TypeError, ValueError, OverflowError) as e:
            report["invalid"] += 1
            logger.warning(f"Row {line_no}: skipped invalid row ({e})")
            continue

        if song.id in catalog:
            report["duplicates"] += 1
            logger.warning(f"Row {line_no}: duplicate id={song.id}")
            continue

        catalog.save(song)
        report["imported"] += 1
        report["song_ids"].append(song.id)

        if on_import is not None:
            on_import(song)

    logger.info(f"Import finished: {report['imported']} imported, "
                f"{report['duplicates']} duplicates, {report['invalid']} invalid")
    return report


def import_catalog(path: str | Path, catalog: SongCatalog,
                   on_import: Optional[Callable[[Song], Any]] = None) -> Dict[str, Any]:
    """Read ``path`` and import its rows into ``catalog``."""
    logger.info(f"Importing catalog from {path}")
    return import_dataframe(read_catalog_file(path), catalog, on_import=on_import)
