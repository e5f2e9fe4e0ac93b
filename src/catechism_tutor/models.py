"""Data classes for the catechism content model."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScriptureRef:
    title: str
    text: str

    def to_dict(self) -> dict:
        return {"T": self.title, "C": self.text}

    @classmethod
    def from_dict(cls, payload: dict) -> "ScriptureRef":
        return cls(title=str(payload["T"]), text=str(payload["C"]))


@dataclass(frozen=True)
class ContentItem:
    """One catechism question with its answer and proof texts.

    ``answer`` carries inline markers like ``[1]``; marker ``[k]`` points at
    ``footnotes[k - 1]``, a group of scripture references.
    """

    id: int
    question: str
    answer: str
    footnotes: tuple = field(default_factory=tuple)

    @property
    def footnote_count(self) -> int:
        return len(self.footnotes)

    def to_dict(self) -> dict:
        return {
            "Q": self.question,
            "A": self.answer,
            "S": [[ref.to_dict() for ref in group] for group in self.footnotes],
        }

    @classmethod
    def from_dict(cls, item_id: int, payload: dict) -> "ContentItem":
        groups = payload.get("S") or []
        return cls(
            id=item_id,
            question=str(payload["Q"]),
            answer=str(payload["A"]),
            footnotes=tuple(
                tuple(ScriptureRef.from_dict(ref) for ref in group) for group in groups
            ),
        )
