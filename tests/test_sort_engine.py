import unittest

from src.application.query_engine import filter_records
from src.application.sort_engine import sort_records
from src.domain.models import CatalogQuery, ServerRecord, SortKey, SortOrder


def _record(name, **overrides) -> ServerRecord:
    fields = {
        "id": name.lower().replace(" ", "-"),
        "name": name,
        "description": "",
        "author": "octocat",
        "repository": "https://github.com/octocat/example",
        "category": "database",
        "language": "python",
        "complexity": "beginner",
        "lastUpdated": "2025-01-01",
    }
    fields.update(overrides)
    return ServerRecord.model_validate(fields)


class TestSortRecords(unittest.TestCase):
    def test_end_to_end_filter_then_sort_by_stars(self) -> None:
        records = [
            _record("Zeta", complexity="beginner", stars=5, lastUpdated="2025-01-01"),
            _record("Alpha", complexity="advanced", stars=10, lastUpdated="2025-06-01"),
        ]

        filtered = filter_records(records, CatalogQuery(category="database"))
        result = sort_records(filtered, "stars", "desc")

        self.assertEqual(len(filtered), 2)
        self.assertEqual([(r.name, r.stars) for r in result], [("Alpha", 10), ("Zeta", 5)])

    def test_sort_by_name_ignores_case(self) -> None:
        records = [_record("beta"), _record("Alpha"), _record("Charlie")]

        result = sort_records(records, SortKey.NAME, SortOrder.ASC)

        self.assertEqual([r.name for r in result], ["Alpha", "beta", "Charlie"])

    def test_complexity_uses_rank_not_lexical_order(self) -> None:
        records = [
            _record("A", complexity="advanced"),
            _record("B", complexity="beginner"),
            _record("C", complexity="intermediate"),
        ]

        ascending = sort_records(records, "complexity", "asc")
        descending = sort_records(records, "complexity", "desc")

        self.assertEqual([r.complexity.value for r in ascending], ["beginner", "intermediate", "advanced"])
        self.assertEqual([r.complexity.value for r in descending], ["advanced", "intermediate", "beginner"])

    def test_missing_stars_count_as_zero(self) -> None:
        records = [_record("Rated", stars=1), _record("Unrated")]

        result = sort_records(records, "stars", "asc")

        self.assertEqual([r.name for r in result], ["Unrated", "Rated"])

    def test_last_updated_sorts_by_calendar_date(self) -> None:
        records = [
            _record("Late", lastUpdated="2025-12-01"),
            _record("Early", lastUpdated="2024-03-15"),
            _record("Middle", lastUpdated="2025-02-28"),
        ]

        result = sort_records(records, "lastUpdated", "asc")

        self.assertEqual([r.name for r in result], ["Early", "Middle", "Late"])

    def test_stable_in_both_directions(self) -> None:
        records = [
            _record("First", stars=3),
            _record("Top", stars=7),
            _record("Second", stars=3),
            _record("Third", stars=3),
        ]

        ascending = sort_records(records, "stars", "asc")
        descending = sort_records(records, "stars", "desc")

        self.assertEqual([r.name for r in ascending], ["First", "Second", "Third", "Top"])
        self.assertEqual([r.name for r in descending], ["Top", "First", "Second", "Third"])

    def test_unknown_key_keeps_input_order(self) -> None:
        records = [_record("Zeta", stars=1), _record("Alpha", stars=9)]

        self.assertEqual(sort_records(records, "popularity", "desc"), records)

    def test_input_is_left_untouched(self) -> None:
        records = [_record("Zeta"), _record("Alpha")]

        result = sort_records(records, "name", "asc")

        self.assertIsNot(result, records)
        self.assertEqual([r.name for r in records], ["Zeta", "Alpha"])
