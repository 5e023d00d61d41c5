"""Plain-text extraction from uploaded .docx files via mammoth."""

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import mammoth

from config.exceptions import DocumentExtractionError
from tools.text_utils import has_extension

logger = logging.getLogger(__name__)

DOCX_EXTENSION = ".docx"


@dataclass
class UploadedFile:
    """A document payload as received from the author."""
    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())


@dataclass
class ExtractionResult:
    content: str
    warning: Optional[str] = None


@dataclass
class BatchExtraction:
    """Outcome for one file of a batch: a result or an error, never both."""
    file_name: str
    result: Optional[ExtractionResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def _extract_raw_text(data: bytes) -> ExtractionResult:
    result = mammoth.extract_raw_text(io.BytesIO(data))
    warning = result.messages[0].message if result.messages else None
    return ExtractionResult(content=result.value, warning=warning)


class DocxExtractor:
    """Extracts raw text from .docx uploads.

    mammoth is synchronous, so extraction runs in a worker thread to keep
    the event loop free.
    """

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, DOCX_EXTENSION)

    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        """Extract the text of one file.

        Raises:
            DocumentExtractionError: Unsupported file type or unreadable document.
        """
        if not self.supports(upload.name):
            raise DocumentExtractionError(
                upload.name, f"Unsupported file type: {upload.name} (expected {DOCX_EXTENSION})",
            )
        try:
            result = await asyncio.to_thread(_extract_raw_text, upload.data)
        except Exception as e:
            logger.error("Error parsing DOCX file %s: %s", upload.name, e)
            raise DocumentExtractionError(upload.name, f"Error processing {upload.name}: {e}") from e

        if result.warning:
            logger.warning("%s: %s", upload.name, result.warning)
        return result

    async def extract_batch(self, uploads: list[UploadedFile]) -> list[BatchExtraction]:
        """Extract every file concurrently; one entry per input, in input order."""

        async def _one(upload: UploadedFile) -> BatchExtraction:
            try:
                return BatchExtraction(upload.name, result=await self.extract(upload))
            except DocumentExtractionError as e:
                return BatchExtraction(upload.name, error=e.message)

        return list(await asyncio.gather(*(_one(u) for u in uploads)))
