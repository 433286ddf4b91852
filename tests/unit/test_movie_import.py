"""
MovieImporter tests - malformed rows and failed upserts are skipped, never fatal.
"""

import csv

import pytest

from exceptions import DatasetNotFoundError, MalformedRecordError
from services import MovieImporter, parse_movie_row
from tests.factories.fakes import FakeDocuments
from tests.factories.model_factories import make_movie_row


def _write_csv(path, rows):
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(make_movie_row().keys()))
        writer.writeheader()
        writer.writerows(rows)
    return path


class TestParseMovieRow:
    def test_valid_row(self, movie_row):
        assert parse_movie_row(2, movie_row).title == movie_row["Title"]

    def test_malformed_row_names_column(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_movie_row(9, make_movie_row(Year=""))
        assert exc_info.value.row_number == 9
        assert "Year" in exc_info.value.reason


class TestImportRows:
    def test_all_valid(self, documents):
        rows = [make_movie_row(rank=str(i)) for i in range(1, 6)]
        summary = MovieImporter(documents).import_rows(rows)

        assert (summary.total, summary.imported, summary.skipped) == (5, 5, 0)
        assert set(documents.documents) == {"1", "2", "3", "4", "5"}

    def test_missing_year_is_skipped(self, documents):
        rows = [
            make_movie_row(rank="1"),
            make_movie_row(rank="2", Year=""),
            make_movie_row(rank="3"),
        ]
        summary = MovieImporter(documents).import_rows(rows)

        assert summary.total == 3
        assert summary.skipped == 1
        assert summary.imported == 2
        assert "2" not in documents.documents
        assert summary.failures[0].startswith("Row 3:")

    def test_failed_upsert_is_skipped(self):
        documents = FakeDocuments(failing_ids={"2"})
        rows = [make_movie_row(rank=str(i)) for i in range(1, 4)]
        summary = MovieImporter(documents).import_rows(rows)

        assert summary.imported == 2
        assert summary.skipped == 1
        assert "upsert failed" in summary.failures[0]

    @pytest.mark.parametrize("bad_rows", range(0, 5))
    def test_imported_equals_total_minus_skipped(self, documents, bad_rows):
        rows = [make_movie_row(rank=str(i)) for i in range(10)]
        for i in range(bad_rows):
            rows[i * 2]["Votes"] = "many"
        summary = MovieImporter(documents).import_rows(rows)

        assert summary.skipped == bad_rows
        assert summary.imported == summary.total - summary.skipped

    def test_failure_lines_are_capped(self, documents):
        rows = [make_movie_row(Rank="") for i in range(5)]
        summary = MovieImporter(documents, max_failure_lines=2).import_rows(rows)
        assert summary.skipped == 5
        assert len(summary.failures) == 2


class TestImportFile:
    def test_imports_csv(self, tmp_path, documents):
        path = _write_csv(tmp_path / "movies.csv", [make_movie_row(rank="1"), make_movie_row(rank="2")])
        summary = MovieImporter(documents).import_file(str(path))
        assert summary.imported == 2
        assert documents.count_documents() == 2

    def test_missing_file(self, tmp_path, documents):
        with pytest.raises(DatasetNotFoundError):
            MovieImporter(documents).import_file(str(tmp_path / "nope.csv"))
