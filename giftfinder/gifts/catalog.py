from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from pathlib import Path
from typing import List

import pandas as pd

from ..config import DEFAULT_APP_CONFIG, AppConfig
from .models import Gift, GiftCreate, GiftCriteria

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "description",
    "price",
    "image",
    "genders",
    "age_min",
    "age_max",
    "nationalities",
    "jobs",
]

_config: AppConfig = DEFAULT_APP_CONFIG
_gifts: list[Gift] | None = None


class CatalogError(Exception):
    """Base error for catalog store operations."""


class GiftNotFoundError(CatalogError):
    def __init__(self, gift_id: str) -> None:
        super().__init__(f"Gift {gift_id!r} not found")
        self.gift_id = gift_id


def _new_id() -> str:
    return uuid.uuid4().hex


def _row_to_gift(row: pd.Series) -> Gift | None:
    name = str(row.get("name", "")).strip()
    if not name:
        return None

    price = pd.to_numeric(row.get("price", ""), errors="coerce")
    if pd.isna(price) or price < 0:
        return None

    image = str(row.get("image", "")).strip() or None
    return Gift(
        id=str(row.get("id", "")).strip() or _new_id(),
        name=name,
        description=str(row.get("description", "")).strip(),
        price=float(price),
        image=image,
        criteria=GiftCriteria(
            genders=row.get("genders", ""),
            age_min=row.get("age_min", "") or None,
            age_max=row.get("age_max", "") or None,
            nationalities=row.get("nationalities", ""),
            jobs=row.get("jobs", ""),
        ),
    )


def load_catalog_csv(path: Path) -> list[Gift]:
    """Read gifts from a CSV with the canonical columns.

    List columns hold comma-separated values; blank cells leave that
    dimension unconstrained. Rows without a name or with an unusable price
    are skipped.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")
    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = ""

    gifts: list[Gift] = []
    for idx, row in df.iterrows():
        gift = _row_to_gift(row)
        if gift is None:
            logger.warning("Skipping malformed catalog row %s in %s", idx, path)
            continue
        gifts.append(gift)

    logger.info("Loaded %d gifts from %s", len(gifts), path)
    return gifts


def save_catalog_csv(gifts: Iterable[Gift], path: Path) -> Path:
    records = []
    for gift in gifts:
        c = gift.criteria
        records.append({
            "id": gift.id,
            "name": gift.name,
            "description": gift.description,
            "price": gift.price,
            "image": gift.image or "",
            "genders": ",".join(c.genders),
            "age_min": c.age_min if c.age_min is not None else "",
            "age_max": c.age_max if c.age_max is not None else "",
            "nationalities": ",".join(c.nationalities),
            "jobs": ",".join(c.jobs),
        })

    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(records, columns=CANONICAL_COLUMNS).to_csv(path, index=False)
    return path


def _load() -> list[Gift]:
    path = _config.catalog_path
    if not path.exists():
        logger.warning("Catalog file %s not found, starting with an empty catalog", path)
        return []
    return load_catalog_csv(path)


def _store() -> list[Gift]:
    global _gifts
    if _gifts is None:
        _gifts = _load()
    return _gifts


def _persist(gifts: list[Gift]) -> None:
    if not _config.persist_catalog:
        return
    try:
        save_catalog_csv(gifts, _config.catalog_path)
    except OSError as exc:
        logger.warning("Failed to write catalog to %s", _config.catalog_path, exc_info=True)
        raise CatalogError("Could not persist the gift catalog") from exc


def get_catalog() -> list[Gift]:
    """Return a snapshot of the catalog, loading it on first call."""
    return list(_store())


def get_gift(gift_id: str) -> Gift:
    for gift in _store():
        if gift.id == gift_id:
            return gift
    raise GiftNotFoundError(gift_id)


def add_gift(data: GiftCreate) -> Gift:
    gift = Gift(id=_new_id(), **data.model_dump())
    gifts = _store()
    # The in-memory catalog only changes once the write succeeded
    _persist([*gifts, gift])
    gifts.append(gift)
    logger.info("Added gift %s (%s)", gift.id, gift.name)
    return gift


def delete_gift(gift_id: str) -> Gift:
    gifts = _store()
    for i, gift in enumerate(gifts):
        if gift.id == gift_id:
            _persist(gifts[:i] + gifts[i + 1:])
            del gifts[i]
            logger.info("Deleted gift %s (%s)", gift.id, gift.name)
            return gift
    raise GiftNotFoundError(gift_id)


def reset_catalog(gifts: Iterable[Gift] | None = None) -> None:
    """Replace the in-memory catalog; ``None`` reloads from disk on next use."""
    global _gifts
    _gifts = list(gifts) if gifts is not None else None
