"""Interactive CLI application."""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt
from rich.table import Table
from rich.text import Text

from catechism_tutor.assistant import (
    build_context, build_prompt, find_relevant_items, parse_question_references,
)
from catechism_tutor.browse import filter_items
from catechism_tutor.catalog import get_catalog, get_item
from catechism_tutor.config import DEFAULT_DB_PATH, LANGUAGES, LOG_LEVEL
from catechism_tutor.dashboard import (
    get_missed_items, get_quiz_history, get_quiz_stats, get_score_color,
    get_score_label, record_quiz_session,
)
from catechism_tutor.db import init_db
from catechism_tutor.formatting import speech_language_tag, speech_text, split_answer
from catechism_tutor.importer import import_catalog
from catechism_tutor.models import ContentItem
from catechism_tutor.quiz import (
    CORRECT, NEXT, PREVIOUS, WRONG, InvalidOperation, QuizError, QuizSession,
)
from catechism_tutor.seed import is_seeded, seed_all
from catechism_tutor.settings import (
    get_bookmarks, get_language, toggle_bookmark, toggle_language,
)

console = Console()
log = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")
QUIZ_KEYS = "[cyan]f[/cyan] flip  [cyan]c[/cyan] got it  [cyan]w[/cyan] missed it  " \
            "[cyan]p[/cyan]/[cyan]n[/cyan] prev/next  [cyan]1-9[/cyan] proof  " \
            "[cyan]s[/cyan] read aloud  [cyan]q[/cyan] leave"


class SessionExitRequested(Exception):
    """Raised when the learner asks to leave a session early."""


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def show_welcome(language: str):
    console.print(Panel(
        "[bold]Westminster Shorter Catechism[/bold]\n[dim]Browse, quiz and study the proofs[/dim]",
        title="Welcome", subtitle=LANGUAGES[language], border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("browse", "List every question"),
        ("search", "Search questions and answers"),
        ("bookmarks", "List saved questions"),
        ("show", "Read one question with its proofs"),
        ("bookmark", "Save or unsave a question"),
        ("quiz", "Ten-card review session"),
        ("ask", "Find catechism context for a question"),
        ("history", "Past quiz scores"),
        ("language", "Switch English / 中文"),
        ("import", "Load a catechism file"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def format_answer(item: ContentItem, active_footnote: int | None = None) -> Text:
    text = Text()
    for segment in split_answer(item.answer):
        if segment.is_marker:
            style = "bold white on dark_goldenrod" if segment.footnote == active_footnote else "bold dark_goldenrod"
            text.append(f"[{segment.text}]", style=style)
        else:
            text.append(segment.text)
    return text


def render_scriptures(item: ContentItem, index: int | None) -> Panel | None:
    if index is None or not 0 <= index < item.footnote_count:
        return None
    body = Text()
    for ref in item.footnotes[index]:
        body.append(f"{ref.title}\n", style="bold")
        body.append(f"\"{ref.text.strip()}\"\n", style="italic dim")
    return Panel(body, title=f"Proof [{index + 1}]", border_style="dark_goldenrod")


def render_item(item: ContentItem, bookmarked: bool = False) -> None:
    star = " [yellow]★[/yellow]" if bookmarked else ""
    console.print(Panel(item.question, title=f"Q{item.id}{star}", border_style="cyan"))
    console.print(Panel(format_answer(item), title="Answer", border_style="green"))
    for index in range(item.footnote_count):
        console.print(render_scriptures(item, index))


def render_progress(session: QuizSession) -> Text:
    bar = Text()
    for position, item_id in enumerate(session.queue):
        outcome = session.outcome_for(item_id)
        if position == session.cursor:
            bar.append("■ ", style="dark_goldenrod")
        elif outcome == CORRECT:
            bar.append("■ ", style="green")
        elif outcome == WRONG:
            bar.append("■ ", style="red")
        else:
            bar.append("■ ", style="grey50")
    return bar


def render_card(item: ContentItem, session: QuizSession) -> None:
    header = Text(f"{session.cursor + 1} / {len(session.queue)}  ", style="bold")
    header.append_text(render_progress(session))
    console.print(header)
    if not session.revealed:
        console.print(Panel(item.question, title="Question", border_style="cyan"))
        return
    console.print(Panel(
        Text(item.question, style="dim") + Text("\n\n") + format_answer(item, session.active_footnote),
        title="Answer", border_style="green",
    ))
    proof = render_scriptures(item, session.active_footnote)
    if proof:
        console.print(proof)


def show_summary(session: QuizSession) -> None:
    score = session.score()
    color = get_score_color(score.percentage)
    console.print(Panel(
        f"[bold {color}]{score.percentage}%[/bold {color}]  {get_score_label(score.percentage)}\n"
        f"{score.correct} correct out of {score.total}",
        title="Quiz Complete", border_style=color,
    ))


def run_quiz_session(items: list, language: str, rng=None) -> QuizSession:
    """Drive one quiz session from learner keystrokes until it completes.

    Raises SessionExitRequested if the learner leaves early.
    """
    by_id = {item.id: item for item in items}
    session = QuizSession()
    session.start_session(len(items), rng)
    console.print(f"\n[bold]Quiz[/bold] — {len(session.queue)} cards\n{QUIZ_KEYS}\n")
    while not session.is_complete:
        item = by_id[session.current_item_id()]
        render_card(item, session)
        key = session_prompt("[bold]>[/bold]", default="f").strip().lower()
        try:
            if key == "f":
                session.flip()
            elif key in ("c", "w"):
                if not session.revealed:
                    console.print("[yellow]Reveal the answer first (f).[/yellow]")
                    continue
                session.grade(CORRECT if key == "c" else WRONG)
            elif key in ("p", "n"):
                if not session.navigate(PREVIOUS if key == "p" else NEXT):
                    console.print("[dim]No more cards that way.[/dim]")
            elif key.isdigit():
                if not session.revealed:
                    console.print("[yellow]Proofs are on the answer side.[/yellow]")
                    continue
                session.toggle_footnote(int(key) - 1, item.footnote_count)
            elif key == "s":
                console.print(f"[dim]({speech_language_tag(language)})[/dim] {speech_text(item, session.revealed)}")
            else:
                console.print("[red]Unknown key.[/red]")
        except InvalidOperation as e:
            console.print(f"[red]{e}[/red]")
        console.print()
    show_summary(session)
    return session


def cmd_browse(db_path: str, query: str = "", bookmarked_only: bool = False):
    language = get_language(db_path)
    bookmarks = get_bookmarks(db_path)
    items = filter_items(get_catalog(db_path, language), query, bookmarks, bookmarked_only)
    if not items:
        if bookmarked_only:
            console.print("[yellow]No saved questions yet. Use 'bookmark' to save one.[/yellow]")
        else:
            console.print(f"[yellow]No questions found matching \"{query}\"[/yellow]")
        return
    table = Table(title=f"{len(items)} {'question' if len(items) == 1 else 'questions'}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Question")
    table.add_column("", justify="center")
    for item in items:
        table.add_row(str(item.id), item.question, "[yellow]★[/yellow]" if item.id in bookmarks else "")
    console.print(table)


def cmd_search(db_path: str):
    query = Prompt.ask("Search")
    cmd_browse(db_path, query=query)


def cmd_show(db_path: str):
    item_id = IntPrompt.ask("Question number")
    item = get_item(db_path, get_language(db_path), item_id)
    if item is None:
        console.print(f"[red]No question {item_id}.[/red]")
        return
    render_item(item, bookmarked=item_id in get_bookmarks(db_path))


def cmd_bookmark(db_path: str):
    item_id = IntPrompt.ask("Question number")
    if get_item(db_path, get_language(db_path), item_id) is None:
        console.print(f"[red]No question {item_id}.[/red]")
        return
    if toggle_bookmark(db_path, item_id):
        console.print(f"[green]Saved Q{item_id}.[/green]")
    else:
        console.print(f"[dim]Removed Q{item_id} from saved.[/dim]")


def cmd_quiz(db_path: str, rng=None):
    language = get_language(db_path)
    items = get_catalog(db_path, language)
    while True:
        try:
            session = run_quiz_session(items, language, rng)
        except SessionExitRequested:
            console.print("[dim]Quiz left unfinished; nothing recorded.[/dim]")
            return
        record_quiz_session(db_path, language, session)
        again = Prompt.ask("Start a new round?", choices=["y", "n"], default="n")
        if again != "y":
            return


def cmd_ask(db_path: str):
    language = get_language(db_path)
    query = Prompt.ask("Your question").strip()
    if not query:
        console.print("[red]A question is required.[/red]")
        return
    items = get_catalog(db_path, language)
    relevant = find_relevant_items(query, items)
    console.print(Panel(build_context(relevant, language), title="Catechism context", border_style="blue"))
    log.debug("Prompt for %r:\n%s", query, build_prompt(query, items, language))
    by_id = {item.id: item for item in items}
    referenced = []
    for part in parse_question_references(query, len(items)):
        if part.is_question and part.question_id not in referenced and part.question_id in by_id:
            referenced.append(part.question_id)
    bookmarks = get_bookmarks(db_path)
    for item_id in referenced:
        render_item(by_id[item_id], bookmarked=item_id in bookmarks)


def cmd_history(db_path: str):
    stats = get_quiz_stats(db_path)
    if not stats["sessions"]:
        console.print("[yellow]No quizzes finished yet.[/yellow]")
        return
    console.print(f"\n  Quizzes: [bold]{stats['sessions']}[/bold]  |  "
                  f"Average: [bold]{stats['avg_percentage']}%[/bold]  |  "
                  f"Best: [bold]{stats['best_percentage']}%[/bold]\n")
    table = Table(title="Recent Quizzes")
    table.add_column("When")
    table.add_column("Lang")
    table.add_column("Score", justify="right")
    for row in get_quiz_history(db_path):
        color = get_score_color(row["percentage"])
        table.add_row(
            (row["completed_at"] or "")[:16].replace("T", " "),
            row["language"],
            f"[{color}]{row['correct']}/{row['total']} ({row['percentage']}%)[/{color}]",
        )
    console.print(table)
    missed = get_missed_items(db_path, get_language(db_path))
    if missed:
        console.print("\n[bold]Most missed:[/bold]")
        for m in missed:
            console.print(f"  [red]{m['misses']}×[/red] Q{m['item_id']}")


def cmd_language(db_path: str):
    language = toggle_language(db_path)
    console.print(f"[green]Language: {LANGUAGES[language]}[/green]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    language = Prompt.ask("Language", choices=list(LANGUAGES), default=get_language(db_path))
    result = import_catalog(db_path, file_path, language)
    console.print(f"[green]Imported {result['count']} questions from {result['filename']} → {result['language']}[/green]")


def main():
    setup_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_all(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")

    show_welcome(get_language(db_path))

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        try:
            if choice == "browse":
                cmd_browse(db_path)
            elif choice == "search":
                cmd_search(db_path)
            elif choice == "bookmarks":
                cmd_browse(db_path, bookmarked_only=True)
            elif choice == "show":
                cmd_show(db_path)
            elif choice == "bookmark":
                cmd_bookmark(db_path)
            elif choice == "quiz":
                cmd_quiz(db_path)
            elif choice == "ask":
                cmd_ask(db_path)
            elif choice == "history":
                cmd_history(db_path)
            elif choice == "language":
                cmd_language(db_path)
            elif choice == "import":
                cmd_import(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Soli Deo gloria.[/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except (QuizError, ValueError) as e:
            console.print(f"[red]{e}[/red]")
        except Exception as e:
            log.exception("Command %r failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
