"""Person records: the flat input of the layout engine.

Records come from the data store as mappings (or as rows of a pandas frame /
``;``-separated CSV file) and are normalized into :class:`PersonRecord`.
Anything the engine does not interpret is kept in ``extra`` and handed back
untouched on the laid out nodes.
"""

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from .errors import InvalidInputShape

logger = logging.getLogger(__name__)

FIELDS = ("id", "father_id", "mother_id", "sibling_order", "photo_url", "node_width")


@dataclass(frozen=True)
class PersonRecord:
    id: Hashable
    father_id: Optional[Hashable] = None
    mother_id: Optional[Hashable] = None
    sibling_order: Optional[int] = None
    photo_url: Optional[str] = None
    node_width: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_url)

    @property
    def parent_refs(self) -> List[Hashable]:
        """Declared parent references, most preferred first."""
        return [ref for ref in (self.father_id, self.mother_id) if ref is not None]

    def to_dict(self) -> dict:
        data = dict(self.extra)
        for name in FIELDS:
            data[name] = getattr(self, name)
        return data

    @classmethod
    def from_mapping(cls, data: Mapping) -> "PersonRecord":
        if not isinstance(data, Mapping):
            kind = type(data).__name__
            raise InvalidInputShape(f"person record must be a mapping, got {kind}")
        record_id = _clean(data.get("id"))
        if record_id is None:
            raise InvalidInputShape(f"person record without id: {dict(data)!r}")
        _check_hashable(record_id, "person id", record_id)
        father_id = _clean(data.get("father_id"))
        mother_id = _clean(data.get("mother_id"))
        _check_hashable(father_id, "father_id", record_id)
        _check_hashable(mother_id, "mother_id", record_id)

        return cls(
            id=record_id,
            father_id=father_id,
            mother_id=mother_id,
            sibling_order=_as_int(data.get("sibling_order"), record_id),
            photo_url=_clean(data.get("photo_url")),
            node_width=_as_float(data.get("node_width"), record_id),
            extra={k: v for k, v in data.items() if k not in FIELDS},
        )


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _check_hashable(value, what: str, record_id):
    # ids and parent references are dictionary keys
    try:
        hash(value)
    except TypeError:
        raise InvalidInputShape(
            f"{what} of {record_id!r} must be hashable, got {type(value).__name__}"
        ) from None


def _clean(value):
    if _is_blank(value):
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def _as_int(value, record_id) -> Optional[int]:
    if _is_blank(value):
        return None
    error = InvalidInputShape(
        f"sibling_order of {record_id!r} must be an integer, got {value!r}"
    )
    if isinstance(value, bool):
        raise error
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise error from None
    if not number.is_integer():
        raise error
    return int(number)


def _as_float(value, record_id) -> Optional[float]:
    if _is_blank(value):
        return None
    try:
        width = float(value)
    except (TypeError, ValueError):
        raise InvalidInputShape(
            f"node_width of {record_id!r} must be a number, got {value!r}"
        ) from None
    if width <= 0:
        raise InvalidInputShape(
            f"node_width of {record_id!r} must be positive, got {value!r}"
        )
    return width


def coerce_records(records) -> List[PersonRecord]:
    """Validate the input collection and normalize every entry."""
    if isinstance(records, pd.DataFrame):
        return records_from_frame(records)
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        kind = type(records).__name__
        raise InvalidInputShape(f"person records must be a sequence, got {kind}")
    return [
        r if isinstance(r, PersonRecord) else PersonRecord.from_mapping(r)
        for r in records
    ]


def records_from_frame(
    df: pd.DataFrame, rename: Optional[Dict[str, str]] = None
) -> List[PersonRecord]:
    """Turn a frame (``id`` column or index) into records.

    ``rename`` maps source column names onto record fields, e.g.
    ``{"parent1_id": "father_id", "parent2_id": "mother_id"}``.
    """
    if rename:
        df = df.rename(columns=rename)
    if "id" not in df.columns:
        df = df.rename_axis("id").reset_index()
    df = df.astype(object).where(df.notnull(), None)
    return [PersonRecord.from_mapping(row) for row in df.to_dict("records")]


def read_records_csv(
    path, sep: str = ";", rename: Optional[Dict[str, str]] = None
) -> List[PersonRecord]:
    df = pd.read_csv(path, sep=sep, dtype=str)
    logger.info("loaded %d records from %s", len(df), path)
    return records_from_frame(df, rename=rename)
