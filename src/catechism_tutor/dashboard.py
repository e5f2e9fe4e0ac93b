"""Quiz history: recording finished sessions and summarising past scores."""
from datetime import datetime

from catechism_tutor.catalog import check_language
from catechism_tutor.db import get_connection
from catechism_tutor.quiz import WRONG, QuizSession


def get_score_label(percentage: float) -> str:
    if percentage >= 90:
        return "EXCELLENT"
    elif percentage >= 70:
        return "GOOD"
    elif percentage >= 50:
        return "KEEP PRACTISING"
    return "NEEDS REVIEW"


def get_score_color(percentage: float) -> str:
    if percentage >= 90:
        return "green"
    elif percentage >= 70:
        return "yellow"
    elif percentage >= 50:
        return "dark_orange"
    return "red"


def record_quiz_session(db_path: str, language: str, session: QuizSession) -> int:
    """Store a completed session's score and per-item outcomes; returns its row id.

    Items skipped past without a grade get no outcome row.
    """
    check_language(language)
    if not session.is_complete:
        raise ValueError("Only completed quiz sessions can be recorded")
    score = session.score()
    conn = get_connection(db_path)
    cursor = conn.execute(
        "INSERT INTO quiz_sessions (language, correct, total, percentage, completed_at) VALUES (?, ?, ?, ?, ?)",
        (language, score.correct, score.total, score.percentage, datetime.now().isoformat()),
    )
    session_id = cursor.lastrowid
    results = session.results
    for position, item_id in enumerate(session.queue):
        if item_id not in results:
            continue
        conn.execute(
            "INSERT INTO quiz_session_results (session_id, item_number, position, outcome) VALUES (?, ?, ?, ?)",
            (session_id, item_id, position, results[item_id]),
        )
    conn.commit()
    conn.close()
    return session_id


def get_quiz_history(db_path: str, limit: int = 10) -> list[dict]:
    """Most recent sessions first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT * FROM quiz_sessions ORDER BY id DESC LIMIT ?", (limit,)
    ).fetchall()
    conn.close()
    return [dict(row) for row in rows]


def get_quiz_stats(db_path: str) -> dict:
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT COUNT(*) as sessions, AVG(percentage) as avg, MAX(percentage) as best FROM quiz_sessions"
    ).fetchone()
    conn.close()
    return {
        "sessions": row["sessions"],
        "avg_percentage": round(row["avg"], 1) if row["avg"] is not None else 0.0,
        "best_percentage": row["best"] or 0,
    }


def get_missed_items(db_path: str, language: str, limit: int = 5) -> list[dict]:
    """Items most often graded wrong in ``language``, worst first."""
    check_language(language)
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT r.item_number, COUNT(*) as misses
        FROM quiz_session_results r
        JOIN quiz_sessions s ON r.session_id = s.id
        WHERE s.language = ? AND r.outcome = ?
        GROUP BY r.item_number
        ORDER BY misses DESC, r.item_number ASC
        LIMIT ?""",
        (language, WRONG, limit),
    ).fetchall()
    conn.close()
    return [{"item_id": r["item_number"], "misses": r["misses"]} for r in rows]
