"""Tests for text utility functions."""

from datetime import datetime, timedelta, timezone

import pytest


class TestTitleFromFilename:
    def test_extension_removed(self):
        from tools.text_utils import title_from_filename
        assert title_from_filename("Chapter 1.docx") == "Chapter 1"

    def test_only_last_extension_removed(self):
        from tools.text_utils import title_from_filename
        assert title_from_filename("part.one.docx") == "part.one"

    def test_directory_removed(self):
        from tools.text_utils import title_from_filename
        assert title_from_filename("drafts/The End.docx") == "The End"

    def test_no_extension(self):
        from tools.text_utils import title_from_filename
        assert title_from_filename("Prologue") == "Prologue"


class TestHasExtension:
    def test_case_insensitive(self):
        from tools.text_utils import has_extension
        assert has_extension("CHAPTER.DOCX", ".docx")

    def test_other_extension(self):
        from tools.text_utils import has_extension
        assert not has_extension("chapter.doc", ".docx")


class TestExcerpt:
    def test_short_text_returned_whole(self):
        from tools.text_utils import excerpt
        assert excerpt("Short text.") == "Short text."

    def test_empty(self):
        from tools.text_utils import excerpt
        assert excerpt("") == ""

    def test_whitespace_collapsed(self):
        from tools.text_utils import excerpt
        assert excerpt("one\n\ntwo   three") == "one two three"

    def test_cut_on_word_boundary(self):
        from tools.text_utils import excerpt
        result = excerpt("alpha beta gamma delta", char_limit=13)
        assert result == "alpha beta..."


class TestParagraphs:
    def test_split_and_strip(self):
        from tools.text_utils import split_into_paragraphs
        assert split_into_paragraphs("First.\n\n  Second.\nThird.\n") == ["First.", "Second.", "Third."]

    def test_count_words(self):
        from tools.text_utils import count_words
        assert count_words("  a quick\nbrown fox ") == 4


class TestTimeAgo:
    NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("delta, expected", [
        (timedelta(seconds=5), "5 seconds ago"),
        (timedelta(minutes=1), "a minute ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=2), "2 days ago"),
    ])
    def test_units(self, delta, expected):
        from tools.text_utils import time_ago
        assert time_ago(self.NOW - delta, now=self.NOW) == expected

    def test_none(self):
        from tools.text_utils import time_ago
        assert time_ago(None) == "-"

    def test_naive_treated_as_utc(self):
        from tools.text_utils import time_ago
        naive = datetime(2024, 1, 10, 10, 0)
        assert time_ago(naive, now=self.NOW) == "2 hours ago"
