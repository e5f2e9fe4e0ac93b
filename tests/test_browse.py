from catechism_tutor.browse import filter_items, matches_query


def test_empty_query_returns_everything(sample_items):
    assert filter_items(sample_items) == sample_items


def test_query_matches_question_case_insensitive(sample_items):
    result = filter_items(sample_items, "WHAT IS GOD")
    assert [item.id for item in result] == [2]


def test_query_matches_answer(sample_items):
    result = filter_items(sample_items, "enjoy him")
    assert [item.id for item in result] == [1]


def test_query_matches_exact_id(sample_items):
    assert [item.id for item in filter_items(sample_items, "3")] == [3]


def test_bookmarked_only(sample_items):
    result = filter_items(sample_items, bookmarks=[3, 1], bookmarked_only=True)
    assert [item.id for item in result] == [1, 3]


def test_bookmarks_ignored_unless_requested(sample_items):
    assert len(filter_items(sample_items, bookmarks=[1])) == 3


def test_bookmarks_and_query_combined(sample_items):
    result = filter_items(sample_items, "god", bookmarks=[2, 3], bookmarked_only=True)
    assert [item.id for item in result] == [2, 3]


# --- Edge case tests ---


def test_no_match(sample_items):
    assert filter_items(sample_items, "zebra") == []


def test_bookmarked_only_with_no_bookmarks(sample_items):
    assert filter_items(sample_items, bookmarked_only=True) == []


def test_whitespace_query_matches_all(sample_items):
    assert all(matches_query(item, "   ") for item in sample_items)


def test_number_query_also_matches_footnote_markers(sample_items):
    """Answers are searched as written, markers included."""
    result = filter_items(sample_items, "1")
    assert [item.id for item in result] == [1, 2]
