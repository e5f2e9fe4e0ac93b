import pytest

from catechism_tutor.assistant import (
    ReplyPart, build_context, build_prompt, find_relevant_items, parse_question_references,
)
from catechism_tutor.models import ContentItem


def test_find_relevant_items_matches_text(sample_items):
    result = find_relevant_items("spirit", sample_items)
    assert [item.id for item in result] == [2]


def test_find_relevant_items_matches_scripture(sample_items):
    result = find_relevant_items("psalm 73", sample_items)
    assert [item.id for item in result] == [1]


def test_find_relevant_items_matches_scripture_text(sample_items):
    result = find_relevant_items("whom have i", sample_items)
    assert [item.id for item in result] == [1]


def test_find_relevant_items_no_duplicates(sample_items):
    """Item 1 matches 'god' in its answer and its proof but appears once."""
    result = find_relevant_items("god", sample_items)
    assert [item.id for item in result] == [1, 2, 3]


def test_find_relevant_items_respects_limit():
    items = [ContentItem(id=i, question=f"Question about grace {i}", answer="Grace.") for i in range(1, 20)]
    result = find_relevant_items("grace", items)
    assert [item.id for item in result] == [1, 2, 3, 4, 5]


def test_find_relevant_items_falls_back_to_opening_items():
    items = [ContentItem(id=i, question=f"Q{i}", answer="A") for i in range(1, 8)]
    result = find_relevant_items("covenant", items)
    assert [item.id for item in result] == [1, 2, 3]


def test_build_context_english(sample_items):
    context = build_context(sample_items[:2], "en")
    assert context.startswith("Here are relevant questions and answers")
    assert "1. Question: What is the chief end of man?\n" in context
    assert "2. Question: What is God?\n   Answer: God is a Spirit.[1]\n\n" in context


def test_build_context_chinese(sample_items):
    context = build_context(sample_items[:1], "zh")
    assert context.startswith("以下是威斯敏斯特小要理问答中的相关问题和答案")


def test_build_prompt_includes_query_and_context(sample_items):
    prompt = build_prompt("  What is God?  ", sample_items, "en")
    assert "User Question: What is God?" in prompt
    assert "1. Question: What is God?" in prompt
    assert "Westminster Shorter Catechism" in prompt


def test_build_prompt_chinese(sample_items):
    prompt = build_prompt("God", sample_items, "zh")
    assert "用户问题：God" in prompt


def test_parse_question_references():
    parts = parse_question_references("See Question 1 and Q2, also #3.", catalog_size=10)
    assert parts == [
        ReplyPart(text="See "),
        ReplyPart(question_id=1),
        ReplyPart(text=" and "),
        ReplyPart(question_id=2),
        ReplyPart(text=", also "),
        ReplyPart(question_id=3),
        ReplyPart(text="."),
    ]


def test_parse_question_references_hash_form():
    parts = parse_question_references("question #4", catalog_size=10)
    assert parts == [ReplyPart(question_id=4)]
    assert parts[0].is_question


def test_parse_question_references_plain_text():
    assert parse_question_references("No references.", catalog_size=10) == [
        ReplyPart(text="No references.")
    ]


# --- Edge case tests ---


def test_empty_query_rejected(sample_items):
    with pytest.raises(ValueError):
        find_relevant_items("   ", sample_items)


def test_out_of_range_reference_stays_text():
    parts = parse_question_references("Q99 is not real", catalog_size=12)
    assert parts[0] == ReplyPart(text="Q99")
    assert not parts[0].is_question


def test_zero_reference_stays_text():
    assert parse_question_references("#0", catalog_size=12) == [ReplyPart(text="#0")]


def test_empty_reply():
    assert parse_question_references("", catalog_size=12) == [ReplyPart(text="")]


def test_unknown_language_rejected(sample_items):
    with pytest.raises(ValueError):
        build_context(sample_items, "fr")
