"""Filter engine - selects the working subset of applications"""

import math
from dataclasses import fields, replace
from datetime import date, datetime
from numbers import Real
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from credit_monitor.domain.exceptions import InvalidFilterCriteriaError
from credit_monitor.domain.models import (
    RISK_LEVELS,
    SCORE_CEILING,
    SCORE_FLOOR,
    STATUSES,
    ApplicationRecord,
    FilterCriteria,
)
from credit_monitor.utils.date_utils import as_utc, parse_iso_datetime

CRITERIA_FIELDS = frozenset(f.name for f in fields(FilterCriteria))


def default_criteria(score_min: int = SCORE_FLOOR, score_max: int = SCORE_CEILING) -> FilterCriteria:
    """Criteria that match the whole population"""
    return FilterCriteria(score_range=(score_min, score_max))


def _matches(record: ApplicationRecord, criteria: FilterCriteria, needle: str) -> bool:
    if needle and needle not in record.applicant_name.lower() and needle not in record.id.lower():
        return False

    if criteria.risk_level and record.risk_level not in criteria.risk_level:
        return False

    if criteria.status and record.status not in criteria.status:
        return False

    low, high = criteria.score_range
    if not low <= record.credit_score <= high:
        return False

    if criteria.date_range is not None:
        start, end = criteria.date_range
        if not start <= as_utc(record.application_date) <= end:
            return False

    return True


def apply_filters(records: Iterable[ApplicationRecord], criteria: FilterCriteria) -> List[ApplicationRecord]:
    """
    Return the records matching every active criterion, in input order.

    Criteria (all ANDed):
    - search_term: case-insensitive substring of applicant name or id (skipped if empty)
    - risk_level / status: membership (skipped if the set is empty)
    - score_range: inclusive, always applied; min > max matches nothing
    - date_range: inclusive, skipped when absent
    """
    needle = criteria.search_term.lower()
    return [record for record in records if _matches(record, criteria, needle)]


def _coerce_choices(name: str, value: Any, allowed: Tuple[str, ...]) -> frozenset:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise InvalidFilterCriteriaError(f"{name} must be a list of values, got {value!r}")
    try:
        choices = frozenset(value)
    except TypeError as e:
        raise InvalidFilterCriteriaError(f"{name} values must be strings") from e
    unknown = [choice for choice in choices if choice not in allowed]
    if unknown:
        raise InvalidFilterCriteriaError(f"Unknown {name} value(s): {sorted(map(str, unknown))}")
    return choices


def _coerce_pair(name: str, value: Any) -> Tuple[Any, Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidFilterCriteriaError(f"{name} must be a [start, end] pair, got {value!r}")
    pair = tuple(value)
    if len(pair) != 2:
        raise InvalidFilterCriteriaError(f"{name} must have exactly two bounds, got {len(pair)}")
    return pair


def _coerce_score_range(value: Any) -> Tuple[int, int]:
    bounds = _coerce_pair("score_range", value)
    for bound in bounds:
        # bool is a Real subclass but never a meaningful score
        if isinstance(bound, bool) or not isinstance(bound, Real) or not math.isfinite(bound):
            raise InvalidFilterCriteriaError(f"score_range bounds must be finite numbers, got {bound!r}")
    return bounds[0], bounds[1]


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = parse_iso_datetime(value)
        except ValueError as e:
            raise InvalidFilterCriteriaError(f"Invalid date_range bound: {value!r}") from e
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if not isinstance(value, datetime):
        raise InvalidFilterCriteriaError(f"Invalid date_range bound: {value!r}")
    return as_utc(value)


def _coerce_date_range(value: Any) -> Optional[Tuple[datetime, datetime]]:
    if value is None:
        return None
    start, end = (_coerce_timestamp(bound) for bound in _coerce_pair("date_range", value))
    if start is None or end is None:
        return None
    return start, end


def update_criteria(current: FilterCriteria, changes: Mapping[str, Any]) -> FilterCriteria:
    """
    Merge a partial update into the current criteria.

    Omitted fields keep their current value. The whole update is validated
    before anything is built, so a rejected update never leaks partial state.

    Raises:
        InvalidFilterCriteriaError: On unknown fields or malformed values
    """
    unknown = set(changes) - CRITERIA_FIELDS
    if unknown:
        raise InvalidFilterCriteriaError(f"Unknown filter field(s): {sorted(unknown)}")

    updates = {}
    if "search_term" in changes:
        if not isinstance(changes["search_term"], str):
            raise InvalidFilterCriteriaError("search_term must be a string")
        updates["search_term"] = changes["search_term"]
    if "risk_level" in changes:
        updates["risk_level"] = _coerce_choices("risk_level", changes["risk_level"], RISK_LEVELS)
    if "status" in changes:
        updates["status"] = _coerce_choices("status", changes["status"], STATUSES)
    if "score_range" in changes:
        updates["score_range"] = _coerce_score_range(changes["score_range"])
    if "date_range" in changes:
        updates["date_range"] = _coerce_date_range(changes["date_range"])

    return replace(current, **updates)
