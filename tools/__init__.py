"""Tools package — document extraction and text utilities."""

from tools.docx_parser import BatchExtraction, DocxExtractor, ExtractionResult, UploadedFile
from tools.text_utils import (
    title_from_filename,
    has_extension,
    count_words,
    excerpt,
    split_into_paragraphs,
    time_ago,
)

__all__ = [
    "BatchExtraction",
    "DocxExtractor",
    "ExtractionResult",
    "UploadedFile",
    "title_from_filename",
    "has_extension",
    "count_words",
    "excerpt",
    "split_into_paragraphs",
    "time_ago",
]
