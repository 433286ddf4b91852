"""
Movie Importer - CSV rows to Cosmos DB documents.

Reads the IMDB movie CSV and upserts one document per valid row. Rows
with a missing required column or an unparseable number are logged and
skipped; so is a row whose upsert fails. Neither aborts the batch.

Invariant:
    summary.imported == summary.total - summary.skipped

Exports:
    MovieImporter: Import coordinator over IDocumentRepository
    parse_movie_row: Validate one CSV row
"""

import csv
from pathlib import Path
from typing import Any, Dict, Iterable

from pydantic import ValidationError

from core.models import ImportSummary, MovieRecord
from exceptions import DatasetNotFoundError, MalformedRecordError
from infrastructure.interface_repository import IDocumentRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "MovieImporter")


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get('loc', ())) or "row"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


def parse_movie_row(row_number: int, row: Dict[str, Any]) -> MovieRecord:
    """
    Validate one CSV row.

    Raises:
        MalformedRecordError: Missing column, empty required value, or bad number
    """
    try:
        return MovieRecord.model_validate(row)
    except ValidationError as e:
        raise MalformedRecordError(row_number, _describe_validation_error(e)) from e


class MovieImporter:
    """
    Upserts movie rows into the movies container.

    Usage:
        documents = RepositoryFactory.create_document_repository(endpoint, key)
        summary = MovieImporter(documents).import_file("IMDB-Movie-Data.csv")
        print(f"{summary.imported}/{summary.total} imported")
    """

    def __init__(self, documents: IDocumentRepository, max_failure_lines: int = 50):
        self.documents = documents
        self.max_failure_lines = max_failure_lines

    def import_file(self, csv_path: str, encoding: str = "utf-8") -> ImportSummary:
        """
        Import every row of a CSV file.

        Raises:
            DatasetNotFoundError: File does not exist
        """
        path = Path(csv_path)
        if not path.is_file():
            raise DatasetNotFoundError(f"Dataset file not found: {path}")

        logger.info(f"📥 Importing movies from {path}")
        with path.open(newline="", encoding=encoding) as handle:
            return self.import_rows(csv.DictReader(handle))

    def import_rows(self, rows: Iterable[Dict[str, Any]]) -> ImportSummary:
        """
        Import already-parsed rows.

        Row numbers in failure messages are file line numbers (header = line 1).
        """
        summary = ImportSummary()

        for row_number, row in enumerate(rows, start=2):
            summary.total += 1

            try:
                movie = parse_movie_row(row_number, row)
            except MalformedRecordError as e:
                self._record_skip(summary, str(e))
                continue

            if self._upsert(row_number, movie, summary):
                summary.imported += 1

        logger.info(
            f"🏁 Import finished: {summary.imported} imported, {summary.skipped} skipped "
            f"of {summary.total}",
            extra={'custom_dimensions': summary.model_dump(exclude={'failures'})}
        )
        return summary

    def _upsert(self, row_number: int, movie: MovieRecord, summary: ImportSummary) -> bool:
        try:
            self.documents.upsert_document(movie.to_document())
        except Exception as e:
            self._record_skip(
                summary,
                f"Row {row_number}: upsert failed for '{movie.title}' ({type(e).__name__}: {e})"
            )
            return False
        logger.debug(f"Imported: {movie.title}")
        return True

    def _record_skip(self, summary: ImportSummary, message: str) -> None:
        summary.skipped += 1
        if len(summary.failures) < self.max_failure_lines:
            summary.failures.append(message)
        logger.warning(f"⚠️ Skipping row - {message}")
