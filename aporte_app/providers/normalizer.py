"""
Normalization of raw portfolio store records into typed inputs.

The portfolio store keeps positions and target models as loosely-typed JSON.
Field names differ between record generations, so each field is looked up
under all of its known aliases. Unusable entries are skipped with a warning.
"""

import json
from collections.abc import Iterable
from typing import Any, Optional, Union

import structlog

from ..errors import MalformedPositionError
from ..models import Position, TargetAllocation

logger = structlog.get_logger(__name__)

FUND_CODE_KEYS = ("fund_code", "fiiCode", "ticker", "code")
VALUE_KEYS = ("current_value", "currentValue", "value")
NAME_KEYS = ("name", "fiiName", "fund_name")
SECTOR_KEYS = ("sector", "setor", "segment")
PERCENTAGE_KEYS = ("ideal_percentage", "percentage", "allocation")

RawRecords = Union[str, Iterable[dict[str, Any]], None]


def _first(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _load_records(raw: RawRecords) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise MalformedPositionError(
                f"Failed to parse records JSON: {e}", raw_data=raw[:100]
            ) from e
    if not isinstance(raw, (list, tuple)):
        raise MalformedPositionError(
            f"Records must be a list, got {type(raw).__name__}", raw_data=str(raw)[:100]
        )
    return list(raw)


def _to_float(value: Any, field: str, record: dict[str, Any]) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise MalformedPositionError(
            f"Invalid {field}: {value!r}", raw_data=str(record)[:100]
        ) from e


def _position_from_record(record: dict[str, Any]) -> Position:
    if not isinstance(record, dict):
        raise MalformedPositionError("Position must be a dict", raw_data=str(record)[:100])

    code = _first(record, FUND_CODE_KEYS)
    if not code:
        raise MalformedPositionError("Missing fund code", raw_data=str(record)[:100])

    value = _first(record, VALUE_KEYS)
    return Position(
        fund_code=str(code).strip().upper(),
        current_value=_to_float(value if value is not None else 0, "current_value", record),
        name=_first(record, NAME_KEYS),
        sector=_first(record, SECTOR_KEYS),
    )


def _target_from_record(record: dict[str, Any]) -> TargetAllocation:
    if not isinstance(record, dict):
        raise MalformedPositionError("Target must be a dict", raw_data=str(record)[:100])

    code = _first(record, FUND_CODE_KEYS)
    if not code:
        raise MalformedPositionError("Missing fund code", raw_data=str(record)[:100])

    percentage = _first(record, PERCENTAGE_KEYS)
    if percentage is None:
        raise MalformedPositionError("Missing ideal percentage", raw_data=str(record)[:100])

    return TargetAllocation(
        fund_code=str(code).strip().upper(),
        sector=_first(record, SECTOR_KEYS) or "OTHER",
        ideal_percentage=_to_float(percentage, "ideal_percentage", record),
        name=_first(record, NAME_KEYS),
    )


def normalize_positions(raw: RawRecords) -> list[Position]:
    """
    Convert raw position records into Position objects.

    Args:
        raw: List of dicts, or a JSON string holding one

    Returns:
        Positions in input order, malformed entries dropped

    Raises:
        MalformedPositionError: The container itself cannot be parsed
    """
    positions = []
    for record in _load_records(raw):
        try:
            positions.append(_position_from_record(record))
        except MalformedPositionError as e:
            logger.warning("Skipping malformed position", error=str(e), raw_data=e.raw_data)
    return positions


def normalize_targets(raw: RawRecords) -> Optional[list[TargetAllocation]]:
    """
    Convert raw target model records into TargetAllocation objects.

    Returns None when no records were supplied at all, so callers can tell a
    missing model apart from one whose entries were all unusable.
    """
    if raw is None:
        return None

    targets = []
    for record in _load_records(raw):
        try:
            targets.append(_target_from_record(record))
        except MalformedPositionError as e:
            logger.warning("Skipping malformed target entry", error=str(e), raw_data=e.raw_data)
    return targets
