"""Tests for audio block insertion."""

from unittest.mock import patch

import pytest

from word_audio.core.block_inserter import BlockInserter
from word_audio.core.text_document import TextDocument
from word_audio.core.word_matcher import WordMatcher
from word_audio.exceptions import ConfigurationError


@pytest.fixture
def inserter() -> BlockInserter:
    return BlockInserter(WordMatcher(r"^\[\[([A-Za-z-']+)\]\]"))


class TestInsertForWord:
    """Single-word insertion placement."""

    def test_blank_line_after_word_is_replaced(self, inserter):
        """Test blank line after word is replaced"""
        doc = TextDocument("[[wisdom]] /ˈwɪzdəm/\n\nthe quality of being wise")
        outcome = inserter.insert_for_word(doc, "wisdom", 0)

        assert outcome.inserted is True
        assert outcome.line == 1
        assert doc.get_value() == (
            "[[wisdom]] /ˈwɪzdəm/\n```word-audio\nwisdom\n```\nthe quality of being wise"
        )

    def test_block_goes_after_answer_divider(self, inserter):
        """Test block goes after answer divider"""
        doc = TextDocument("[[cat]] /kæt/\n?\n\nA small animal")
        inserter.insert_for_word(doc, "cat", 0)
        assert doc.get_value() == "[[cat]] /kæt/\n?\n```word-audio\ncat\n```\nA small animal"

    def test_content_line_is_pushed_down(self, inserter):
        """Test content line is pushed down"""
        doc = TextDocument("[[cat]]\n?\nanswer\nmore")
        outcome = inserter.insert_for_word(doc, "cat", 0)
        assert outcome.line == 2
        assert doc.get_value() == "[[cat]]\n?\n```word-audio\ncat\n```\nanswer\nmore"

    def test_word_on_last_line_appends_block(self, inserter):
        """Test word on last line appends block"""
        doc = TextDocument("[[cat]]")
        outcome = inserter.insert_for_word(doc, "cat", 0)
        assert outcome.inserted is True
        assert doc.get_value() == "[[cat]]\n```word-audio\ncat\n```"

    def test_existing_block_is_not_duplicated(self, inserter):
        """Test existing block is not duplicated"""
        original = "[[cat]]\n?\n```word-audio\ncat\n```\nanswer"
        doc = TextDocument(original)
        outcome = inserter.insert_for_word(doc, "cat", 0)
        assert outcome.inserted is False
        assert doc.get_value() == original

    def test_block_line_count_is_enforced(self, inserter):
        """Test block line count is enforced"""
        with patch(
            "word_audio.core.block_inserter.build_block",
            return_value="```word-audio\ncat\n\n```",
        ):
            with pytest.raises(ConfigurationError):
                inserter.block_for("cat")


class TestAnnotateLine:
    """Current-line command."""

    def test_annotates_word_on_line(self, inserter):
        """Test annotating the word on a single line"""
        doc = TextDocument("title\n[[cat]]\n\nnext")
        result = inserter.annotate_line(doc, 1)
        assert result.inserted == 1
        assert result.inserted_words == ["cat"]
        assert doc.get_value() == "title\n[[cat]]\n```word-audio\ncat\n```\nnext"

    def test_line_without_word_does_nothing(self, inserter):
        """Test line without word does nothing"""
        doc = TextDocument("title\n[[cat]]")
        result = inserter.annotate_line(doc, 0)
        assert result.inserted == 0
        assert result.skipped == 0
        assert doc.get_value() == "title\n[[cat]]"

    def test_already_annotated_line_is_skipped(self, inserter):
        """Test already annotated line is skipped"""
        doc = TextDocument("[[cat]]\n```word-audio\ncat\n```")
        result = inserter.annotate_line(doc, 0)
        assert result.inserted == 0
        assert result.skipped == 1


class TestAnnotateDocument:
    """Whole-buffer cursor batch."""

    NOTE = "[[cat]]\n?\n\n---\n[[dog]]\n?\nanswer\n---\n[[cat]]\n"
    ANNOTATED = (
        "[[cat]]\n?\n```word-audio\ncat\n```\n---\n"
        "[[dog]]\n?\n```word-audio\ndog\n```\nanswer\n---\n[[cat]]\n"
    )

    def test_each_word_annotated_once(self, inserter):
        """Test each word is annotated only once"""
        doc = TextDocument(self.NOTE)
        result = inserter.annotate_document(doc)
        assert result.inserted == 2
        assert result.inserted_words == ["cat", "dog"]
        assert doc.get_value() == self.ANNOTATED

    def test_second_run_is_a_no_op(self, inserter):
        """Test a second run inserts nothing"""
        doc = TextDocument(self.NOTE)
        inserter.annotate_document(doc)
        once = doc.get_value()

        result = inserter.annotate_document(doc)
        assert result.inserted == 0
        assert result.skipped == 2
        assert doc.get_value() == once

    def test_adjacent_words_are_all_annotated(self, inserter):
        """Test adjacent words are all annotated"""
        doc = TextDocument("[[a]]\n\n[[b]]\n[[c]]")
        result = inserter.annotate_document(doc)
        assert result.inserted_words == ["a", "b", "c"]
        assert doc.get_value() == (
            "[[a]]\n```word-audio\na\n```\n"
            "[[b]]\n```word-audio\nb\n```\n"
            "[[c]]\n```word-audio\nc\n```"
        )
        assert inserter.annotate_document(doc).inserted == 0


class TestAnnotateText:
    """File-content rewrite variant."""

    def test_inserts_after_divider_collapsing_blank_lines(self, inserter):
        """Test inserts after divider collapsing blank lines"""
        content = "[[wisdom]] /ˈwɪzdəm/\n?\n\n\nthe quality of being wise\n"
        new_content, result = inserter.annotate_text(content)
        assert result.inserted_words == ["wisdom"]
        assert new_content == (
            "[[wisdom]] /ˈwɪzdəm/\n?\n```word-audio\nwisdom\n```\n"
            "the quality of being wise\n"
        )

    def test_rewrite_is_idempotent(self, inserter):
        """Test rewrite is idempotent"""
        content = "[[cat]]\n?\nfeline\n\n[[dog]]\n  ?  \ncanine\n"
        once, first = inserter.annotate_text(content)
        twice, second = inserter.annotate_text(once)
        assert first.inserted == 2
        assert second.inserted == 0
        assert second.skipped == 2
        assert twice == once

    def test_unmatched_layout_returns_original(self, inserter):
        """Test unmatched layout returns original"""
        content = "[[cat]]\nno divider here\n"
        new_content, result = inserter.annotate_text(content)
        assert new_content is content
        assert result.inserted == 0
        assert result.skipped == 0

    def test_duplicate_word_counted_once(self, inserter):
        """Test a repeated word is counted once"""
        content = "[[cat]]\n?\nfeline\n[[cat]]\n?\nagain\n"
        new_content, result = inserter.annotate_text(content)
        assert result.inserted == 1
        assert new_content.count("```word-audio") == 1
