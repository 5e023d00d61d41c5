"""Tests for the click command line interface, run against the mock store."""

from types import SimpleNamespace

import pytest
from click.testing import CliRunner


@pytest.fixture
def run(tmp_path, monkeypatch):
    """Invoke the CLI in mock mode without latency; returns the click Result."""
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "")
    monkeypatch.setenv("MOCK_READ_DELAY", "0")
    monkeypatch.setenv("MOCK_WRITE_DELAY", "0")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    from cli.main import cli
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, list(args))

    return _run


class TestReaderCommands:
    def test_help_lists_commands(self, run):
        result = run("--help")
        assert result.exit_code == 0
        for name in ("home", "search", "create-novel", "import-chapters"):
            assert name in result.output

    def test_home(self, run):
        result = run("home")
        assert result.exit_code == 0
        assert "Latest novels" in result.output
        assert "Latest chapters" in result.output

    def test_genres(self, run):
        result = run("genres")
        assert result.exit_code == 0
        assert "Science Fiction" in result.output

    def test_search(self, run):
        result = run("search", "crystal")
        assert result.exit_code == 0
        assert "Search results (1)" in result.output

    def test_search_by_genres(self, run):
        result = run("search", "-g", "1", "-g", "6")
        assert result.exit_code == 0
        assert "Search results (1)" in result.output

    def test_search_no_match(self, run):
        result = run("search", "zeppelin")
        assert "No novels match your search." in result.output

    def test_show(self, run):
        result = run("show", "1")
        assert result.exit_code == 0
        assert "The Beginning" in result.output

    def test_show_missing(self, run):
        result = run("show", "missing")
        assert result.exit_code == 1
        assert "Novel missing not found" in result.output

    def test_read(self, run):
        result = run("read", "1", "2")
        assert result.exit_code == 0
        assert "The Discovery" in result.output
        assert "Previous:" in result.output
        assert "Next:" in result.output

    def test_read_chapter_of_other_novel(self, run):
        result = run("read", "1", "4")
        assert result.exit_code == 1


class TestAuthorCommands:
    def test_create_novel(self, run):
        result = run("create-novel", "-t", "Alpha", "-d", "dragons", "-g", "fantasy")
        assert result.exit_code == 0
        assert "Novel created successfully!" in result.output

    def test_create_novel_validation(self, run):
        result = run("create-novel", "-t", " ", "-d", "dragons")
        assert result.exit_code == 1
        assert "Required field(s) empty: title" in result.output
        assert "Novel created" not in result.output

    def test_edit_novel(self, run):
        result = run("edit-novel", "1", "-t", "Renamed")
        assert result.exit_code == 0
        assert "Novel updated successfully!" in result.output

    def test_edit_missing_novel(self, run):
        result = run("edit-novel", "missing", "-t", "Renamed")
        assert result.exit_code == 1

    def test_delete_novel(self, run):
        result = run("delete-novel", "2", "--yes")
        assert result.exit_code == 0
        assert "Novel deleted successfully!" in result.output

    def test_delete_missing_novel(self, run):
        result = run("delete-novel", "missing", "--yes")
        assert result.exit_code == 1
        assert "Novel not found" in result.output

    def test_add_chapter(self, run):
        result = run("add-chapter", "1", "-t", "Four", "-c", "The story goes on.")
        assert result.exit_code == 0
        assert "Chapter created successfully!" in result.output
        assert "#4 Four" in result.output

    def test_add_chapter_requires_content(self, run):
        result = run("add-chapter", "1", "-t", "Four")
        assert result.exit_code == 1
        assert "content" in result.output

    def test_add_chapter_to_missing_novel(self, run):
        result = run("add-chapter", "missing", "-t", "Four", "-c", "text")
        assert result.exit_code == 1

    def test_edit_chapter(self, run):
        result = run("edit-chapter", "2", "-t", "Revised")
        assert result.exit_code == 0
        assert "Chapter updated successfully!" in result.output

    def test_delete_chapter(self, run):
        result = run("delete-chapter", "1", "--yes")
        assert result.exit_code == 0
        assert "Chapter deleted successfully!" in result.output

    def test_reorder(self, run):
        result = run("reorder", "1", "3", "2", "1")
        assert result.exit_code == 0
        assert "Chapter order updated" in result.output


class TestImportCommand:
    @pytest.fixture
    def docs(self, tmp_path, monkeypatch):
        from tools import docx_parser

        def extract_raw_text(fileobj):
            data = fileobj.read()
            if data == b"FAIL":
                raise ValueError("File is not a zip file")
            return SimpleNamespace(value=data.decode("utf-8"), messages=[])

        monkeypatch.setattr(docx_parser.mammoth, "extract_raw_text", extract_raw_text)
        good = tmp_path / "Homecoming.docx"
        good.write_bytes(b"They came back.")
        bad = tmp_path / "broken.docx"
        bad.write_bytes(b"FAIL")
        return good, bad

    def test_import_batch(self, run, docs):
        good, bad = docs
        result = run("import-chapters", "1", str(good), str(bad))
        assert result.exit_code == 0
        assert "1 created, 1 failed" in result.output
        assert "Homecoming.docx" in result.output
        assert "broken.docx" in result.output

    def test_import_error_with_brackets_rendered(self, run, docs, monkeypatch):
        from tools import docx_parser

        def extract_raw_text(fileobj):
            raise ValueError("bad part [word/document.xml]")

        monkeypatch.setattr(docx_parser.mammoth, "extract_raw_text", extract_raw_text)
        good, _ = docs
        result = run("import-chapters", "1", str(good))
        assert result.exit_code == 1
        assert "[word/document.xml]" in result.output

    def test_import_all_failed(self, run, docs):
        _, bad = docs
        result = run("import-chapters", "1", str(bad))
        assert result.exit_code == 1

    def test_add_chapter_from_file(self, run, docs):
        good, _ = docs
        result = run("add-chapter", "1", "--file", str(good))
        assert result.exit_code == 0
        assert "Homecoming" in result.output

    def test_add_chapter_from_unreadable_file(self, run, docs):
        _, bad = docs
        result = run("add-chapter", "1", "--file", str(bad))
        assert result.exit_code == 1
        assert "Error processing broken.docx" in result.output
