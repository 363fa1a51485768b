import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from src.application.query_engine import filter_records
from src.application.sort_engine import sort_records
from src.domain.exceptions import (
    CatalogFileException,
    DuplicateIdentifierException,
    SchemaViolationException,
)
from src.domain.models import (
    CatalogQuery,
    CatalogValidationReport,
    RecordIssue,
    ServerRecord,
    SortKey,
    SortOrder,
)
from src.domain.validation import validate_record
from src.infrastructure.catalog_store import JsonCatalogRepository

logger = logging.getLogger(__name__)


def _catalog_order(document: Dict[str, Any]):
    return (
        str(document.get('category', '')).casefold(),
        str(document.get('name', '')).casefold(),
    )


class CatalogService:
    """
    Service responsible for maintaining the catalog file: appending validated
    records, validating the whole collection, and answering search queries.

    The collection is kept sorted by (category, name) after each insertion.
    """

    def __init__(self, repository: JsonCatalogRepository):
        self.repository = repository

    def add_record(self, candidate: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validates a raw server document and appends it to the catalog.

        Args:
            candidate (Dict[str, Any]): The decoded server document.

        Returns:
            Dict[str, Any]: The document as persisted.

        Raises:
            SchemaViolationException: The document failed one or more schema checks.
            DuplicateIdentifierException: A server with the same id already exists.
            CatalogFileException: The catalog holds an entry that is not a JSON object.
        """
        errors = validate_record(candidate)
        if errors:
            raise SchemaViolationException(errors)

        documents = self.repository.load()
        for index, document in enumerate(documents):
            if not isinstance(document, dict):
                raise CatalogFileException(
                    f"Catalog entry at index {index} is not a JSON object; run validate to list all problems."
                )

        if any(document.get('id') == candidate['id'] for document in documents):
            raise DuplicateIdentifierException(candidate['id'])

        documents.append(candidate)
        documents.sort(key=_catalog_order)
        self.repository.save(documents)

        logger.info(
            f"Added server '{candidate['name']}' (id={candidate['id']}, "
            f"category={candidate['category']}, language={candidate['language']})."
        )
        return candidate

    def validate_all(self) -> CatalogValidationReport:
        """Runs the record validator over every document in the catalog."""
        documents = self.repository.load()
        issues: List[RecordIssue] = []

        for index, document in enumerate(documents):
            errors = validate_record(document)
            if errors:
                name = document.get('name') if isinstance(document, dict) else None
                if not isinstance(name, str) or not name:
                    name = 'Unknown'
                issues.append(RecordIssue(index=index, name=name, errors=errors))

        report = CatalogValidationReport(total_records=len(documents), issues=issues)
        if report.is_valid:
            logger.info(f"All {report.total_records} servers are valid.")
        else:
            logger.error(
                f"Found {report.error_count} validation errors across {report.total_records} servers."
            )
        return report

    def load_records(self) -> List[ServerRecord]:
        """Parses the catalog into ServerRecords, skipping documents that do not fit the model."""
        records: List[ServerRecord] = []
        for index, document in enumerate(self.repository.load()):
            try:
                records.append(ServerRecord.model_validate(document))
            except ValidationError as e:
                logger.warning(f"Skipping catalog entry at index {index}: {e.error_count()} invalid field(s).")
        return records

    def search(
        self,
        query: Optional[CatalogQuery] = None,
        key: Union[SortKey, str] = SortKey.NAME,
        order: Union[SortOrder, str] = SortOrder.ASC,
    ) -> List[ServerRecord]:
        """Filters then sorts the catalog, the way the listing page presents it."""
        return sort_records(filter_records(self.load_records(), query), key, order)
