import pytest

from catechism_tutor.models import ContentItem, ScriptureRef


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def sample_items():
    """Three small catechism items, the first two carrying proofs."""
    return [
        ContentItem(
            id=1,
            question="What is the chief end of man?",
            answer="Man's chief end is to glorify God,[1] and to enjoy him for ever.[2]",
            footnotes=(
                (ScriptureRef("1 Corinthians 10:31", "Do all to the glory of God."),),
                (ScriptureRef("Psalm 73:25", "Whom have I in heaven but thee?"),),
            ),
        ),
        ContentItem(
            id=2,
            question="What is God?",
            answer="God is a Spirit.[1]",
            footnotes=((ScriptureRef("John 4:24", "God is a Spirit."),),),
        ),
        ContentItem(id=3, question="Are there more Gods than one?", answer="There is but One only."),
    ]
