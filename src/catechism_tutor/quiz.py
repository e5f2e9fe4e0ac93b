"""Quiz session engine: sampling, flip/grade/navigate transitions and scoring.

The engine holds no content. It works on item ids ``1..N`` handed out by a
catalog provider and never touches storage; callers render the state and
forward learner intents to the transition methods below.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from catechism_tutor import config

log = logging.getLogger(__name__)

ACTIVE = "ACTIVE"
COMPLETE = "COMPLETE"

CORRECT = "correct"
WRONG = "wrong"
OUTCOMES = (CORRECT, WRONG)

PREVIOUS = "previous"
NEXT = "next"
DIRECTIONS = {PREVIOUS: -1, NEXT: 1}


class QuizError(Exception):
    """Base class for quiz engine errors."""


class EmptyCatalog(QuizError):
    """Raised when a session is started over a catalog with no items."""


class InvalidOperation(QuizError):
    """Raised when a transition is not allowed in the current state."""


@dataclass
class SessionState:
    queue: tuple
    cursor: int = 0
    revealed: bool = False
    results: dict = field(default_factory=dict)
    active_footnote: Optional[int] = None
    phase: str = ACTIVE


@dataclass(frozen=True)
class Score:
    correct: int
    graded: int
    total: int

    @property
    def percentage(self) -> int:
        """Correct share of the whole queue, rounded half up."""
        return (self.correct * 200 + self.total) // (self.total * 2)


def sample_queue(catalog_size: int, rng, length: int = config.SESSION_LENGTH) -> tuple:
    """Draw ``min(length, catalog_size)`` distinct ids from ``1..catalog_size``.

    Runs a Fisher-Yates pass over the full id range using ``rng.randrange``
    so a seeded ``random.Random`` makes the draw reproducible.
    """
    if catalog_size < 1:
        raise EmptyCatalog("No catechism items available to quiz on")
    ids = list(range(1, catalog_size + 1))
    for i in range(len(ids) - 1, 0, -1):
        j = rng.randrange(i + 1)
        ids[i], ids[j] = ids[j], ids[i]
    return tuple(ids[:length])


class QuizSession:
    """One learner's quiz session.

    Every transition checks its preconditions before touching state, so a
    rejected call leaves the session exactly as it was.
    """

    def __init__(self, session_length: int = config.SESSION_LENGTH) -> None:
        if session_length <= 0:
            raise ValueError("Session length must be positive")
        self.session_length = session_length
        self.state: Optional[SessionState] = None

    def start_session(self, catalog_size: int, rng=None) -> SessionState:
        if rng is None:
            rng = random.Random()
        queue = sample_queue(catalog_size, rng, self.session_length)
        self.state = SessionState(queue=queue)
        log.debug("Started session over %d items: %s", catalog_size, queue)
        return self.state

    def _require_state(self) -> SessionState:
        if self.state is None:
            raise InvalidOperation("No quiz session has been started")
        return self.state

    def _require_active(self, action: str) -> SessionState:
        state = self._require_state()
        if state.phase != ACTIVE:
            raise InvalidOperation(f"Cannot {action} a completed session; restart it first")
        return state

    @property
    def phase(self) -> str:
        return self._require_state().phase

    @property
    def is_complete(self) -> bool:
        return self.phase == COMPLETE

    @property
    def queue(self) -> tuple:
        return self._require_state().queue

    @property
    def cursor(self) -> int:
        return self._require_state().cursor

    @property
    def revealed(self) -> bool:
        return self._require_state().revealed

    @property
    def active_footnote(self) -> Optional[int]:
        return self._require_state().active_footnote

    @property
    def results(self) -> dict:
        return dict(self._require_state().results)

    @property
    def is_last(self) -> bool:
        state = self._require_state()
        return state.cursor == len(state.queue) - 1

    def current_item_id(self) -> int:
        state = self._require_state()
        return state.queue[state.cursor]

    def outcome_for(self, item_id: int) -> Optional[str]:
        return self._require_state().results.get(item_id)

    def flip(self) -> bool:
        state = self._require_active("flip a card in")
        state.revealed = not state.revealed
        state.active_footnote = None
        return state.revealed

    def grade(self, outcome: str) -> str:
        """Record ``outcome`` for the current item and move on.

        Grading the last position completes the session; anywhere else the
        cursor advances to a fresh, hidden card. Re-grading an item after
        navigating back to it overwrites the earlier outcome. Cards skipped with
        ``navigate`` stay ungraded and count as not correct in ``score``.
        """
        if outcome not in OUTCOMES:
            raise InvalidOperation(f"Unknown outcome: {outcome!r}")
        state = self._require_active("grade")
        item_id = state.queue[state.cursor]
        state.results[item_id] = outcome
        if self.is_last:
            state.phase = COMPLETE
            log.debug("Graded item %d %s; session complete", item_id, outcome)
        else:
            state.cursor += 1
            state.revealed = False
            state.active_footnote = None
            log.debug("Graded item %d %s", item_id, outcome)
        return state.phase

    def navigate(self, direction: str) -> bool:
        """Move one card back or forward; returns False at either end."""
        if direction not in DIRECTIONS:
            raise InvalidOperation(f"Unknown direction: {direction!r}")
        state = self._require_active("navigate")
        target = state.cursor + DIRECTIONS[direction]
        if target < 0 or target >= len(state.queue):
            return False
        state.cursor = target
        state.revealed = False
        state.active_footnote = None
        return True

    def toggle_footnote(self, index: int, footnote_count: int) -> Optional[int]:
        """Show footnote group ``index`` of the current item, or hide it if shown.

        ``footnote_count`` is the number of footnote groups the current item
        carries; the engine does not hold content itself.
        """
        state = self._require_state()
        if not 0 <= index < footnote_count:
            raise InvalidOperation(
                f"Footnote {index} out of range for item {state.queue[state.cursor]}"
            )
        state.active_footnote = None if state.active_footnote == index else index
        return state.active_footnote

    def score(self) -> Score:
        state = self._require_state()
        correct = sum(1 for outcome in state.results.values() if outcome == CORRECT)
        return Score(correct=correct, graded=len(state.results), total=len(state.queue))
