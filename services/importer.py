"""Chapter creation from uploaded documents, one file or a whole batch."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from config.exceptions import DocumentExtractionError
from models.chapter import Chapter, ChapterFormData
from repositories.base import ChapterRepository
from tools.docx_parser import DocxExtractor, UploadedFile
from tools.text_utils import title_from_filename

logger = logging.getLogger(__name__)


@dataclass
class ImportedChapter:
    file_name: str
    chapter: Chapter


@dataclass
class ImportFailure:
    file_name: str
    error: str


@dataclass
class BatchImportReport:
    created: list[ImportedChapter] = field(default_factory=list)
    failed: list[ImportFailure] = field(default_factory=list)

    @property
    def chapters(self) -> list[Chapter]:
        return [item.chapter for item in self.created]

    @property
    def ok(self) -> bool:
        return not self.failed


class ChapterImporter:
    """Turns .docx uploads into chapters of a novel."""

    def __init__(self, chapters: ChapterRepository, extractor: Optional[DocxExtractor] = None):
        self.chapters = chapters
        self.extractor = extractor or DocxExtractor()

    async def import_document(
        self, novel_id: str, upload: UploadedFile, title: Optional[str] = None
    ) -> Chapter:
        """Create one chapter from a document.

        Raises:
            DocumentExtractionError: The file could not be read or holds no text.
                No chapter is created in that case.
        """
        result = await self.extractor.extract(upload)
        if not result.content.strip():
            raise DocumentExtractionError(upload.name, f"No text found in {upload.name}")

        form = ChapterFormData(title=title or title_from_filename(upload.name), content=result.content)
        return await self.chapters.create(novel_id, form)

    async def import_batch(self, novel_id: str, uploads: list[UploadedFile]) -> BatchImportReport:
        """Create one chapter per readable file, in input order.

        Chapters are created strictly one at a time so their orders follow
        the input sequence. Unreadable or empty files are reported and
        skipped; repository failures abort the batch.
        """
        report = BatchImportReport()
        extractions = await self.extractor.extract_batch(uploads)

        for index, item in enumerate(extractions, start=1):
            if not item.ok:
                logger.warning("Skipping %s (%d/%d): %s", item.file_name, index, len(uploads), item.error)
                report.failed.append(ImportFailure(item.file_name, item.error or "Unknown error"))
                continue
            if not item.result.content.strip():
                logger.warning("Skipping %s (%d/%d): no text", item.file_name, index, len(uploads))
                report.failed.append(ImportFailure(item.file_name, f"No text found in {item.file_name}"))
                continue

            form = ChapterFormData(title=title_from_filename(item.file_name), content=item.result.content)
            chapter = await self.chapters.create(novel_id, form)
            report.created.append(ImportedChapter(item.file_name, chapter))

        logger.info(
            "Batch import into novel %s: %d created, %d failed",
            novel_id, len(report.created), len(report.failed),
        )
        return report
