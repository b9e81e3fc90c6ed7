"""Tests for capture text helpers."""
import pytest

from entrybox.utils.text import extract_url_from_text, summarize_title


class TestSummarizeTitle:
    def test_uses_first_line(self):
        assert summarize_title("Read Pluto vol.1\nGreat pacing") == "Read Pluto vol.1"

    def test_trims_first_line(self):
        assert summarize_title("   padded title   \nmore") == "padded title"

    def test_truncates_to_80_characters(self):
        assert summarize_title("x" * 120) == "x" * 80

    @pytest.mark.parametrize("text", ["", "   ", "\nsecond line"])
    def test_empty_first_line_falls_back(self, text):
        assert summarize_title(text) == "quick note"


class TestExtractUrl:
    def test_trailing_punctuation_stripped(self):
        text = "save this https://example.com/path?x=1, thanks"
        assert extract_url_from_text(text) == "https://example.com/path?x=1"

    def test_first_url_wins(self):
        text = "http://a.example and https://b.example"
        assert extract_url_from_text(text) == "http://a.example"

    def test_brackets_stripped(self):
        assert extract_url_from_text("(see https://x.example/a).") == "https://x.example/a"

    def test_token_must_start_with_scheme(self):
        assert extract_url_from_text("(https://x.example)") is None

    def test_no_url(self):
        assert extract_url_from_text("just words here") is None
