"""Tests for data model classes."""
import dataclasses

import pytest

from catechism_tutor.models import ContentItem, ScriptureRef


def test_scripture_ref_round_trip_keys():
    ref = ScriptureRef.from_dict({"T": "Psalm 86", "C": "Bow down thine ear, O LORD."})
    assert ref.title == "Psalm 86"
    assert ref.text == "Bow down thine ear, O LORD."
    assert ref.to_dict() == {"T": "Psalm 86", "C": "Bow down thine ear, O LORD."}


def test_content_item_from_dict():
    item = ContentItem.from_dict(4, {
        "Q": "What is God?",
        "A": "God is a Spirit,[1] infinite.[2]",
        "S": [[{"T": "John 4:24", "C": "God is a Spirit."}], [{"T": "Job 11:7", "C": "Canst thou?"}]],
    })
    assert item.id == 4
    assert item.footnote_count == 2
    assert item.footnotes[1][0].title == "Job 11:7"


def test_content_item_defaults():
    item = ContentItem(id=1, question="Q?", answer="A")
    assert item.footnotes == ()
    assert item.footnote_count == 0


def test_content_item_missing_scriptures():
    item = ContentItem.from_dict(1, {"Q": "Q?", "A": "A"})
    assert item.footnotes == ()


def test_content_item_to_dict_uses_original_keys(sample_items):
    payload = sample_items[1].to_dict()
    assert payload == {
        "Q": "What is God?",
        "A": "God is a Spirit.[1]",
        "S": [[{"T": "John 4:24", "C": "God is a Spirit."}]],
    }


def test_content_item_is_immutable(sample_items):
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_items[0].question = "changed"
