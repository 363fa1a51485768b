from typing import Iterable, List, Optional

from src.domain.models import CatalogQuery, ServerRecord

ALL = "all"


def _is_active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def _matches_text(record: ServerRecord, text: str) -> bool:
    needle = text.lower()
    return (
        needle in record.name.lower()
        or needle in record.description.lower()
        or needle in record.author.lower()
        or any(needle in tag.lower() for tag in record.tags)
    )


def _matches_tags(record: ServerRecord, tags: List[str]) -> bool:
    # Any query tag contained in any record tag
    record_tags = [tag.lower() for tag in record.tags]
    return any(
        query_tag.lower() in record_tag
        for query_tag in tags
        for record_tag in record_tags
    )


def matches(record: ServerRecord, query: CatalogQuery) -> bool:
    """Returns True when the record passes every active predicate of the query."""
    if query.text and not _matches_text(record, query.text):
        return False
    if _is_active(query.category) and record.category.value != query.category:
        return False
    if _is_active(query.language) and record.language.value != query.language:
        return False
    if _is_active(query.complexity) and record.complexity.value != query.complexity:
        return False
    if query.tags and not _matches_tags(record, query.tags):
        return False
    return True


def filter_records(
    records: Iterable[ServerRecord],
    query: Optional[CatalogQuery] = None,
) -> List[ServerRecord]:
    """
    Returns the records matching the query, in their original relative order.
    An empty query keeps every record. The input is never mutated.
    """
    if query is None:
        return list(records)
    return [record for record in records if matches(record, query)]
