"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler, map view and backend as the vanilla CLI.  Includes a
built-in menu for picking one of the three play modes.
"""

from __future__ import annotations

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import DeferredQueue, GamePlay
from backend.models.catalog import Catalog
from backend.models.question import GameMode, GameStatus, QuestionType
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.map_view import map_rows, resolve_pick

console = Console()

_MODE_KEYS = {"1": GameMode.IDENTIFY, "2": GameMode.RECALL, "3": GameMode.LOCATE}
_NOUN = {QuestionType.REGION: "province or territory", QuestionType.SETTLEMENT: "city"}


class RichFeedback:
    """Collects the one-line verdict shown under the map."""

    def __init__(self) -> None:
        self.message = ""

    def on_correct(self) -> None:
        self.message = "[bold green]✔ Correct![/bold green]"

    def on_incorrect(self) -> None:
        self.message = "[bold red]✘ Incorrect.[/bold red]"

    def on_finished(self) -> None:
        console.bell()


# -- rendering ----------------------------------------------------------------


def _render_map(game: GamePlay) -> Table:
    table = Table(
        box=rich.box.SIMPLE_HEAVY,
        border_style="bright_blue",
        show_edge=False,
        padding=(0, 1),
    )
    table.add_column("Key", justify="right", style="bold cyan")
    table.add_column("Name")
    table.add_column("", style="dim")

    for row in map_rows(game):
        if row.highlighted:
            name = f"[bold black on yellow] {row.label} [/bold black on yellow]"
        elif row.selected:
            name = f"[bold black on cyan] {row.label} [/bold black on cyan]"
        elif row.found:
            name = f"[green]{row.label}[/green]"
        else:
            name = f"[dim]{row.label}[/dim]"
        table.add_row(row.key, name, row.detail)
    return table


def _render_prompt(game: GamePlay) -> Text:
    question = game.current_question
    text = Text()

    if game.mode is GameMode.RECALL:
        target = game.active_recall_target
        if target is None:
            text.append("Pick a place on the map and name it.", style="bold")
        else:
            text.append("Name the selected place.", style="bold")
        return text

    if question is None:
        return text

    noun = _NOUN[question.question_type]
    if game.mode is GameMode.IDENTIFY:
        text.append(f"Which {noun} is highlighted?\n\n", style="bold")
        for i, option in enumerate(question.options, 1):
            text.append(f"  {i}", style="bold cyan")
            text.append(f"  {option}\n")
    else:
        text.append(f"Find the {noun} ", style="bold")
        text.append(question.target_name, style="bold yellow")
    return text


def _render_stats(game: GamePlay) -> Text:
    total = len(game.catalog.all_names)
    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(str(game.score), style="bold yellow")
    stats.append("    Found: ", style="dim")
    stats.append(f"{len(game.found_names)}/{total}", style="bold yellow")
    return stats


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    controls = Text()
    if game.mode is GameMode.IDENTIFY:
        controls.append("  1-9", style="bold cyan")
        controls.append("  answer   ", style="dim")
        controls.append("N", style="bold cyan")
        controls.append("  skip   ", style="dim")
        controls.append("Q", style="bold cyan")
        controls.append("  back", style="dim")
    else:
        controls.append("  code", style="bold cyan")
        controls.append(" / ", style="dim")
        controls.append("number", style="bold cyan")
        controls.append("  pick   ", style="dim")
        controls.append("blank", style="bold cyan")
        controls.append("  back", style="dim")

    panel = Panel(
        Group(_render_map(game), Text(""), _render_prompt(game)),
        title=f"[bold cyan]{str(game.mode).capitalize()} Mode[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_render_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_finished(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("ALL FOUND!", style="bold green")
    congrats.append("  You know your map!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    panel = Panel(
        Group(Align.center(congrats), Align.center(_render_stats(game))),
        title=f"[bold green]{str(game.mode).capitalize()} Mode[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))


def _draw_menu(catalog: Catalog) -> None:
    console.clear()

    summary = catalog.summary()
    counts = Text(
        f"{summary['provinces']} provinces  ·  "
        f"{summary['territories']} territories  ·  "
        f"{summary['settlements']} cities",
        style="dim",
    )

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Identify    ")
    opts.append("2", style="bold yellow")
    opts.append("  Recall    ")
    opts.append("3", style="bold magenta")
    opts.append("  Locate    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(counts),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    panel = Panel(
        body,
        title="[bold]G E O G R A P H Y   Q U I Z[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


# -- turns --------------------------------------------------------------------


def _ask(prompt: str) -> str | None:
    try:
        return Prompt.ask(prompt, default="", show_default=False, console=console)
    except (EOFError, KeyboardInterrupt):
        return None


def _wait_for_advance(queue: DeferredQueue) -> bool:
    """Let the feedback stay up until the next question is due.

    Returns False if the player quit while waiting.
    """
    while queue.pending:
        key = get_key_timeout(0.1)
        if key == "quit":
            return False
        queue.run_due()
    return True


def _identify_turn(game: GamePlay, feedback: RichFeedback) -> bool:
    question = game.current_question
    key = get_key()
    if key == "quit":
        return False
    if key == "next":
        game.next_question()
    elif question and key.isdigit() and 1 <= int(key) <= len(question.options):
        game.submit_answer(question.options[int(key) - 1])
        if game.game_status is GameStatus.INCORRECT:
            feedback.message += f"  It was [bold]{question.target_name}[/bold]."
    return True


def _locate_turn(game: GamePlay, feedback: RichFeedback) -> bool:
    question = game.current_question
    raw = _ask("  Click")
    if not raw:
        return False
    entity = resolve_pick(game.catalog, raw)
    if entity is None:
        feedback.message = f"[yellow]Nothing at \"{escape(raw)}\" on the map.[/yellow]"
        return True
    if entity.name in game.found_names:
        feedback.message = f"[dim]{entity.name} is already found.[/dim]"
        return True
    game.submit_answer(entity)
    if question and game.game_status is GameStatus.INCORRECT:
        feedback.message += (
            f"  That was {entity.name}; {question.target_name} is highlighted."
        )
    return True


def _recall_turn(game: GamePlay, feedback: RichFeedback) -> bool:
    raw = _ask("  Pick")
    if not raw:
        return False
    entity = resolve_pick(game.catalog, raw)
    if entity is None:
        feedback.message = f"[yellow]Nothing at \"{escape(raw)}\" on the map.[/yellow]"
        return True
    if not game.select_recall_target(entity):
        feedback.message = f"[dim]{entity.name} is already found.[/dim]"
        return True

    _draw_game(game)
    answer = _ask("  Name")
    if not answer:
        game.cancel_recall()
        return True
    game.submit_recall_answer(answer)
    if game.game_status is GameStatus.INCORRECT:
        feedback.message += f"  It was [bold]{entity.name}[/bold]."
    return True


# -- game loops ---------------------------------------------------------------


def _play_mode(
    game: GamePlay, queue: DeferredQueue, feedback: RichFeedback, mode: GameMode
) -> None:
    game.select_mode(mode)
    feedback.message = ""
    turns = {
        GameMode.IDENTIFY: _identify_turn,
        GameMode.RECALL: _recall_turn,
        GameMode.LOCATE: _locate_turn,
    }

    while True:
        if game.is_finished:
            _draw_finished(game)
            get_key()
            break

        _draw_game(game, feedback.message)

        if game.game_status is not GameStatus.PLAYING:
            if not _wait_for_advance(queue):
                break
            feedback.message = ""
            continue

        status_before = feedback.message
        if not turns[mode](game, feedback):
            break
        if feedback.message == status_before and game.game_status is GameStatus.PLAYING:
            feedback.message = ""

    game.quit_mode()


def _menu_loop(game: GamePlay, queue: DeferredQueue, feedback: RichFeedback) -> None:
    while True:
        _draw_menu(game.catalog)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        if key in _MODE_KEYS:
            _play_mode(game, queue, feedback, _MODE_KEYS[key])


# -- public entry point -------------------------------------------------------


def run(catalog: Catalog, config: GameConfig, mode: GameMode | None = None) -> None:
    """Launch the Rich CLI, optionally jumping straight into *mode*."""
    queue = DeferredQueue()
    feedback = RichFeedback()
    game = GamePlay(catalog, config=config, scheduler=queue, feedback=feedback)

    if mode is not None:
        _play_mode(game, queue, feedback, mode)
    _menu_loop(game, queue, feedback)
