"""Tests for advice excerpt formatting."""

import pytest

from creator_kb.modules.advice import format_advice_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Post consistently.", "Post consistently."),
        ("1. Post consistently.", "Post consistently."),
        ("- Reply to comments", "Reply to comments"),
        ("• Collaborate often", "Collaborate often"),
        ("12) Batch your filming", "Batch your filming"),
        ("–Use trending audio", "Use trending audio"),
    ],
)
def test_leading_markers_are_removed(raw, expected):
    assert format_advice_text(raw) == expected


def test_first_non_empty_line_is_used():
    raw = "\r\n   \r\n  First tip here.  \r\nSecond line is ignored."

    assert format_advice_text(raw) == "First tip here."


def test_blank_input_returns_stripped_raw():
    assert format_advice_text("  \n \n") == ""


def test_short_text_is_idempotent():
    once = format_advice_text("Show your face in the first three seconds.")

    assert format_advice_text(once) == once


def test_long_line_is_cut_at_sentence_boundary():
    sentence = "Consistency beats intensity when you are growing a new channel from scratch."
    line = " ".join([sentence] * 6)
    assert len(line) > 360

    result = format_advice_text(line)

    assert result.endswith(".")
    assert len(result) > 280
    assert result.count(sentence) == 4
    assert len(result) < len(line)


def test_long_line_without_sentences_is_hard_cut():
    line = "word " * 100

    result = format_advice_text(line)

    assert len(result) <= 320
    assert result == ("word " * 64).strip()


def test_line_at_limit_is_untouched():
    line = "a" * 360

    assert format_advice_text(line) == line
