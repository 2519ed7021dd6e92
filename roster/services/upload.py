"""Roster upload processing service."""

import logging

from roster.core.exceptions import NothingToImportError, StorageFailure, StorageFailureKind
from roster.schemas.upload import ImportPreview, ImportResult, ImportStatus
from roster.services.ingest import (
    ClassifiedRow,
    accepted_records,
    classify_rows,
    rejections,
    summary_entries,
)
from roster.services.spreadsheet import parse_workbook
from roster.services.store import DuplicateKeyError, StoreError, StudentStore

logger = logging.getLogger(__name__)


class UploadService:
    """Spreadsheet roster import service."""

    def __init__(self, store: StudentStore):
        self.store = store

    def preview_upload(self, file_content: bytes) -> ImportPreview:
        """Classify every row of a workbook without storing anything."""
        classified = classify_rows(parse_workbook(file_content))
        accepted = accepted_records(classified)
        rejected = rejections(classified)
        return ImportPreview(
            total_rows=len(classified),
            accepted_rows=len(accepted),
            rejected_rows=len(rejected),
            rows=[row.to_preview() for row in classified],
            rejections=rejected,
            summary=summary_entries(accepted),
        )

    def process_upload(self, file_content: bytes) -> ImportResult:
        """Parse, classify and import a workbook."""
        rows = parse_workbook(file_content)
        logger.info(f"[STUDENT UPLOAD] Parsed {len(rows)} data rows from Excel")
        return self.import_batch(classify_rows(rows))

    def import_batch(self, classified: list[ClassifiedRow]) -> ImportResult:
        """
        Import a classified batch.

        STRICT: if any row was rejected nothing is written and every
        rejection is returned. Otherwise all accepted records go to the
        store in one insert.
        """
        if not classified:
            raise NothingToImportError()

        accepted = accepted_records(classified)
        rejected = rejections(classified)
        summary = summary_entries(accepted)

        if rejected:
            return ImportResult(
                status=ImportStatus.VALIDATION_FAILED,
                total_rows=len(classified),
                imported_rows=0,
                rejections=rejected,
                summary=summary,
                message="Validation errors found in uploaded data.",
            )

        try:
            self.store.insert_many(accepted)
        except DuplicateKeyError:
            raise StorageFailure(
                StorageFailureKind.DUPLICATE_KEY,
                "Duplicate Student ID found. Please ensure all Student IDs are unique.",
            )
        except StoreError:
            raise StorageFailure(StorageFailureKind.UNKNOWN)

        return ImportResult(
            status=ImportStatus.SUCCESS,
            total_rows=len(classified),
            imported_rows=len(accepted),
            summary=summary,
            message="Data uploaded and stored successfully.",
        )
