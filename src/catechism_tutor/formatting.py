"""Answer text helpers: footnote markers and read-aloud text."""
import re
from dataclasses import dataclass
from typing import Optional

from catechism_tutor.catalog import check_language
from catechism_tutor.config import SPEECH_LANGUAGE_TAGS
from catechism_tutor.models import ContentItem

FOOTNOTE_PATTERN = re.compile(r"\[(\d+)\]")


@dataclass(frozen=True)
class AnswerSegment:
    text: str
    footnote: Optional[int] = None  # 0-based footnote group index for marker segments

    @property
    def is_marker(self) -> bool:
        return self.footnote is not None


def split_answer(text: str) -> list[AnswerSegment]:
    """Split an answer into plain text and footnote marker segments."""
    segments = []
    last = 0
    for match in FOOTNOTE_PATTERN.finditer(text):
        if match.start() > last:
            segments.append(AnswerSegment(text[last:match.start()]))
        segments.append(AnswerSegment(match.group(1), int(match.group(1)) - 1))
        last = match.end()
    if last < len(text):
        segments.append(AnswerSegment(text[last:]))
    return segments


def footnote_indices(text: str) -> list[int]:
    seen = []
    for match in FOOTNOTE_PATTERN.finditer(text):
        index = int(match.group(1)) - 1
        if index not in seen:
            seen.append(index)
    return seen


def strip_footnote_markers(text: str) -> str:
    cleaned = FOOTNOTE_PATTERN.sub("", text)
    return re.sub(r"\s+", " ", cleaned).strip()


def speech_text(item: ContentItem, revealed: bool) -> str:
    """The text of the face being shown, without markers, for a TTS collaborator."""
    return strip_footnote_markers(item.answer if revealed else item.question)


def speech_language_tag(language: str) -> str:
    return SPEECH_LANGUAGE_TAGS[check_language(language)]
