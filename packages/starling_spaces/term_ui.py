"""Terminal rendering and selection helpers (prompt_toolkit-based).

These helpers are the rendering collaborator for the browser: they paint an
ordered list of rows under a column schema and report back the identity of
the row the user picked. They hold no browsing state and are kept apart from
:mod:`starling_spaces.browser` so they can be tested in isolation with a
pipe-input session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.validation import ValidationError, Validator

from .categories import SPENDING_CATEGORIES
from .models import DisplayRow
from .views import render_table

BACK_WORDS = frozenset({"", "q", "b", "back", "quit"})


def _session(session: PromptSession | None, kb: KeyBindings) -> PromptSession:
    if session is None:
        return PromptSession(key_bindings=kb)
    return PromptSession(
        input=getattr(session, "input", None),
        output=getattr(session, "output", None),
        key_bindings=kb,
    )


def _cancel_bindings() -> KeyBindings:
    kb = KeyBindings()

    @kb.add("escape")
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    @kb.add("c-c", eager=True)
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    return kb


class _RowNumberValidator(Validator):
    def __init__(self, count: int) -> None:
        self._count = count

    def validate(self, document) -> None:
        text = document.text.strip().lower()
        if text in BACK_WORDS:
            return
        if not text.isdecimal() or not 1 <= int(text) <= self._count:
            raise ValidationError(message=f"Enter a row number 1-{self._count}, or q to go back")


def select_row(
    rows: Sequence[DisplayRow],
    columns: tuple[str, ...],
    *,
    title: str | None = None,
    default_index: int | None = None,
    message: str = "Row # (Enter/q to go back): ",
    session: PromptSession | None = None,
    echo: Callable[[str], None] = print,
) -> Any | None:
    """Show ``rows`` as a numbered table and return the chosen row's identity.

    Returns ``None`` when the user goes back (empty input, ``q``, Esc) or
    when there are no rows. ``default_index`` (0-based) pre-fills the prompt,
    which is how a preserved selection is highlighted after a refresh.
    """

    if title:
        echo(title)
    echo(render_table(columns, rows, numbered=True))
    if not rows:
        echo("(no rows)")
        return None

    kb = _cancel_bindings()
    sess = _session(session, kb)
    default = ""
    if default_index is not None and 0 <= default_index < len(rows):
        default = str(default_index + 1)

    answer = sess.prompt(
        message,
        default=default,
        validator=_RowNumberValidator(len(rows)),
        validate_while_typing=False,
        key_bindings=kb,
    )
    if answer is None:
        return None
    text = answer.strip().lower()
    if text in BACK_WORDS:
        return None
    return rows[int(text) - 1].identity


class _CategoryValidator(Validator):
    def __init__(self, allowed: set[str]) -> None:
        self._allowed = allowed

    def validate(self, document) -> None:
        text = document.text.strip().upper()
        if text and text not in self._allowed:
            raise ValidationError(message="Pick a spending category from the list")


def select_spending_category(
    *,
    default: str | None = None,
    options: Sequence[str] = SPENDING_CATEGORIES,
    session: PromptSession | None = None,
    message: str = "New spending category (Tab to complete • Esc to cancel): ",
) -> str | None:
    """Prompt for a spending category code from ``options``.

    Matching is case-insensitive and the canonical upper-case code is
    returned. Esc, Ctrl+C or empty input cancel and return ``None``.
    """

    kb = _cancel_bindings()
    canonical = {code.upper(): code for code in options}
    completer = WordCompleter(list(options), ignore_case=True, match_middle=True, sentence=False)
    sess = _session(session, kb)

    value = sess.prompt(
        message,
        default=default or "",
        completer=completer,
        validator=_CategoryValidator(set(canonical)),
        validate_while_typing=False,
        key_bindings=kb,
    )
    if value is None or not value.strip():
        return None
    return canonical[value.strip().upper()]


__all__ = ["select_row", "select_spending_category", "BACK_WORDS"]
