"""Tests for the custom exception hierarchy."""

import pytest
from config.exceptions import (
    NovelShelfError,
    DataSourceError,
    RemoteServiceError,
    RowNotFoundError,
    DocumentExtractionError,
    ValidationError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_novelshelf_error(self):
        leaf_classes = [
            DataSourceError, RemoteServiceError, RowNotFoundError,
            DocumentExtractionError,
            ValidationError,
        ]
        for cls in leaf_classes:
            assert issubclass(cls, NovelShelfError), f"{cls.__name__} must inherit NovelShelfError"

    def test_data_source_subclasses(self):
        assert issubclass(RemoteServiceError, DataSourceError)
        assert issubclass(RowNotFoundError, RemoteServiceError)

    def test_extraction_error_is_not_a_data_source_error(self):
        assert not issubclass(DocumentExtractionError, DataSourceError)


class TestExceptionFormatting:
    def test_message_only(self):
        err = DataSourceError("store unavailable")
        assert str(err) == "store unavailable"
        assert err.details == {}

    def test_details_appended(self):
        err = NovelShelfError("bad input", {"field": "title"})
        assert str(err) == "bad input (field=title)"

    def test_remote_error_carries_code_and_status(self):
        err = RemoteServiceError("novels: boom", code="XX000", status=500)
        assert err.code == "XX000"
        assert err.status == 500
        assert "code=XX000" in str(err)
        assert "status=500" in str(err)

    def test_row_not_found_code(self):
        err = RowNotFoundError(status=406)
        assert err.code == "PGRST116"
        assert err.message == "No rows found"

    def test_extraction_error_default_message(self):
        err = DocumentExtractionError("chapter1.docx")
        assert err.file_name == "chapter1.docx"
        assert err.message == "Failed to extract text from chapter1.docx"
        assert err.details == {"file": "chapter1.docx"}

    def test_can_be_caught_as_base(self):
        with pytest.raises(NovelShelfError):
            raise RowNotFoundError()
