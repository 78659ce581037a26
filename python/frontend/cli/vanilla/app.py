"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for picking one of the three play modes.
"""

from __future__ import annotations

import sys

from backend.config import GameConfig
from backend.engine.gameplay import DeferredQueue, GamePlay
from backend.models.catalog import Catalog
from backend.models.question import GameMode, GameStatus, QuestionType
from frontend.cli.input_handler import get_key, get_key_timeout, read_line
from frontend.cli.map_view import map_rows, resolve_pick


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_HL = "\033[43;30m"  # yellow bg, black fg (highlighted target)
_SEL = "\033[46;30m"  # cyan bg, black fg (recall target)

_MODE_KEYS = {"1": GameMode.IDENTIFY, "2": GameMode.RECALL, "3": GameMode.LOCATE}
_NOUN = {QuestionType.REGION: "province or territory", QuestionType.SETTLEMENT: "city"}


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


class AnsiFeedback:
    """Keeps the last verdict line; rings the terminal bell on completion."""

    def __init__(self) -> None:
        self.message = ""

    def on_correct(self) -> None:
        self.message = f"{_G}Correct!{_R}"

    def on_incorrect(self) -> None:
        self.message = f"{_RED}Incorrect.{_R}"

    def on_finished(self) -> None:
        sys.stdout.write("\a")
        sys.stdout.flush()


# -- map rendering ------------------------------------------------------------


def _render_map(game: GamePlay) -> str:
    rows = map_rows(game)
    key_w = max((len(r.key) for r in rows), default=1)
    name_w = max((len(r.label) for r in rows), default=6)

    lines: list[str] = []
    for row in rows:
        label = f"{row.label:<{name_w}}"
        if row.highlighted:
            label = f"{_HL}{label}{_R}"
        elif row.selected:
            label = f"{_SEL}{label}{_R}"
        elif row.found:
            label = f"{_G}{label}{_R}"
        else:
            label = f"{_DIM}{label}{_R}"
        lines.append(f"  {_C}{row.key:>{key_w}}{_R}  {label}  {_DIM}{row.detail}{_R}")
    return "\n".join(lines)


def _stats_line(game: GamePlay) -> str:
    total = len(game.catalog.all_names)
    return (
        f"  Score: {_Y}{game.score}{_R}  |  "
        f"Found: {_Y}{len(game.found_names)}/{total}{_R}"
    )


# -- screens ------------------------------------------------------------------


def _show_menu(catalog: Catalog) -> None:
    _clear()
    summary = catalog.summary()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}     G E O G R A P H Y   Q U I Z      {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    print(
        f"    {_DIM}{summary['provinces']} provinces, "
        f"{summary['territories']} territories, "
        f"{summary['settlements']} cities{_R}"
    )
    print()
    print(f"    {_C}1{_R}  Identify")
    print(f"    {_Y}2{_R}  Recall")
    print(f"    {_C}3{_R}  Locate")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


def _show_game(game: GamePlay, status: str = "") -> None:
    _clear()
    print(f"  {_C}=== {str(game.mode).capitalize()} Mode ==={_R}")
    print()
    print(_render_map(game))
    print()

    question = game.current_question
    if game.mode is GameMode.RECALL:
        if game.active_recall_target is None:
            print(f"  {_BOLD}Pick a place on the map and name it.{_R}")
        else:
            print(f"  {_BOLD}Name the selected place.{_R}")
    elif question is not None:
        noun = _NOUN[question.question_type]
        if game.mode is GameMode.IDENTIFY:
            print(f"  {_BOLD}Which {noun} is highlighted?{_R}")
            for i, option in enumerate(question.options, 1):
                print(f"    {_C}{i}{_R}  {option}")
        else:
            print(f"  {_BOLD}Find the {noun} {_Y}{question.target_name}{_R}")

    print()
    print(_stats_line(game))
    if status:
        print(f"  {status}")
    if game.mode is GameMode.IDENTIFY:
        print(f"  {_C}1-9{_R}: answer  |  {_C}N{_R}: skip  |  {_C}Q{_R}: back")
    else:
        print(f"  {_C}code{_R}/{_C}number{_R}: pick  |  {_C}blank{_R}: back")


def _show_finished(game: GamePlay) -> None:
    _clear()
    print(f"  {_G}=== {str(game.mode).capitalize()} Mode ==={_R}")
    print()
    print(f"  {_G}★ ALL FOUND! You know your map! ★{_R}")
    print()
    print(_stats_line(game))
    print(f"\n  {_DIM}Press any key to go back.{_R}")


# -- turns --------------------------------------------------------------------


def _wait_for_advance(queue: DeferredQueue) -> bool:
    while queue.pending:
        key = get_key_timeout(0.1)
        if key == "quit":
            return False
        queue.run_due()
    return True


def _identify_turn(game: GamePlay, feedback: AnsiFeedback) -> bool:
    question = game.current_question
    key = get_key()
    if key == "quit":
        return False
    if key == "next":
        game.next_question()
    elif question and key.isdigit() and 1 <= int(key) <= len(question.options):
        game.submit_answer(question.options[int(key) - 1])
        if game.game_status is GameStatus.INCORRECT:
            feedback.message += f"  It was {_BOLD}{question.target_name}{_R}."
    return True


def _locate_turn(game: GamePlay, feedback: AnsiFeedback) -> bool:
    question = game.current_question
    raw = read_line("  Click: ")
    if not raw:
        return False
    entity = resolve_pick(game.catalog, raw)
    if entity is None:
        feedback.message = f"{_Y}Nothing at {raw!r} on the map.{_R}"
        return True
    if entity.name in game.found_names:
        feedback.message = f"{_DIM}{entity.name} is already found.{_R}"
        return True
    game.submit_answer(entity)
    if question and game.game_status is GameStatus.INCORRECT:
        feedback.message += (
            f"  That was {entity.name}; {question.target_name} is highlighted."
        )
    return True


def _recall_turn(game: GamePlay, feedback: AnsiFeedback) -> bool:
    raw = read_line("  Pick: ")
    if not raw:
        return False
    entity = resolve_pick(game.catalog, raw)
    if entity is None:
        feedback.message = f"{_Y}Nothing at {raw!r} on the map.{_R}"
        return True
    if not game.select_recall_target(entity):
        feedback.message = f"{_DIM}{entity.name} is already found.{_R}"
        return True

    _show_game(game)
    answer = read_line("  Name: ")
    if not answer:
        game.cancel_recall()
        return True
    game.submit_recall_answer(answer)
    if game.game_status is GameStatus.INCORRECT:
        feedback.message += f"  It was {_BOLD}{entity.name}{_R}."
    return True


# -- game loops ---------------------------------------------------------------


def _play_mode(
    game: GamePlay, queue: DeferredQueue, feedback: AnsiFeedback, mode: GameMode
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
            _show_finished(game)
            get_key()
            break

        _show_game(game, feedback.message)

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


def _menu_loop(game: GamePlay, queue: DeferredQueue, feedback: AnsiFeedback) -> None:
    while True:
        _show_menu(game.catalog)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        if key in _MODE_KEYS:
            _play_mode(game, queue, feedback, _MODE_KEYS[key])


# -- public entry point -------------------------------------------------------


def run(catalog: Catalog, config: GameConfig, mode: GameMode | None = None) -> None:
    """Launch the vanilla CLI, optionally jumping straight into *mode*."""
    queue = DeferredQueue()
    feedback = AnsiFeedback()
    game = GamePlay(catalog, config=config, scheduler=queue, feedback=feedback)

    if mode is not None:
        _play_mode(game, queue, feedback, mode)
    _menu_loop(game, queue, feedback)
