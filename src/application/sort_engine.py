import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Union

from src.domain.models import COMPLEXITY_RANK, ServerRecord, SortKey, SortOrder

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    # Unparsable dates sort as the earliest possible date
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return date.min


_KEY_FUNCTIONS: Dict[str, Callable[[ServerRecord], Any]] = {
    SortKey.NAME.value: lambda record: record.name.casefold(),
    SortKey.STARS.value: lambda record: record.stars or 0,
    SortKey.LAST_UPDATED.value: lambda record: _parse_date(record.last_updated),
    SortKey.COMPLEXITY.value: lambda record: COMPLEXITY_RANK[record.complexity.value],
}


def sort_records(
    records: Iterable[ServerRecord],
    key: Union[SortKey, str] = SortKey.NAME,
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> List[ServerRecord]:
    """
    Returns a new list of records ordered by ``key``.

    The sort is stable in both directions: records with equal keys keep their
    input order whether ``order`` is ascending or descending. An unrecognised
    key compares every record as equal, so the input order is returned.

    Args:
        records (Iterable[ServerRecord]): Records to order; left untouched.
        key (SortKey | str): One of name, stars, lastUpdated, complexity.
        order (SortOrder | str): asc or desc.

    Returns:
        List[ServerRecord]: The ordered copy.
    """
    key_value = key.value if isinstance(key, SortKey) else key
    order_value = order.value if isinstance(order, SortOrder) else order

    key_function = _KEY_FUNCTIONS.get(key_value)
    if key_function is None:
        logger.debug(f"Unknown sort key '{key_value}'; keeping input order.")
        return list(records)

    # reverse=True keeps equal elements in input order, unlike reversing the result
    return sorted(records, key=key_function, reverse=order_value == SortOrder.DESC.value)
