"""Rich terminal renderer for the build board.

Content rules live in plain functions returning ``Line`` tuples so they can
be asserted without a terminal; ``BoardRenderer`` wraps them in Rich
renderables.

Color scheme
------------
- yellow : RUNNING
- green  : SUCCESS
- red    : FAILURE, CANCELED
- grey   : QUEUED, UNKNOWN
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from buildticker.models import BuildCard, BuildState
from buildticker.state.cards import BoardSnapshot

TITLE = "TeamCity Webhook Ticker"
HINT = "(POST /webhook)"

NUMBER_WIDTH = 18
DEFINITION_WIDTH = 50
ELLIPSIS = "…"

_STATE_STYLES: dict[BuildState, str] = {
    BuildState.RUNNING: "yellow",
    BuildState.SUCCESS: "green",
    BuildState.FAILURE: "red",
    BuildState.CANCELED: "red",
    BuildState.QUEUED: "bright_black",
    BuildState.UNKNOWN: "bright_black",
}


@dataclass(frozen=True)
class Line:
    """One line of card content with an optional Rich style."""

    text: str
    style: str = ""


def truncate(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    if width <= 1:
        return ELLIPSIS
    return text[: width - 1] + ELLIPSIS


def format_elapsed(seconds: float) -> str:
    """Format a duration as HH:MM:SS."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def title_line(card: BuildCard) -> Line:
    number = truncate(card.number or "(no number)", NUMBER_WIDTH)
    return Line(f"{number}  {truncate(card.definition_name, DEFINITION_WIDTH)}", "bold")


def card_lines(card: BuildCard, now: float) -> list[Line]:
    """
    Displayable content for one card.

    Args:
        card: Card to project
        now: Current ``time.monotonic()`` reading

    Returns:
        Title, status with elapsed time while running, issuer, and the
        dimmed change note for cards that are not running
    """
    lines = [title_line(card)]

    if card.is_running:
        started = card.started_at if card.started_at is not None else now
        lines.append(
            Line(f"{card.state.label}  ({format_elapsed(now - started)})", _STATE_STYLES[card.state])
        )

    lines.append(Line(f"by {card.issuer or 'unknown'}"))

    if not card.is_running and card.last_change_note:
        lines.append(Line(card.last_change_note, "dim"))

    return lines


def summary_text(snapshot: BoardSnapshot) -> str:
    return (
        f"Queue: {snapshot.queued_count}"
        f"    Running: {snapshot.running_count}"
        f"    Showing: {snapshot.shown_count}"
    )


def board_lines(snapshot: BoardSnapshot, now: float) -> list[list[Line]]:
    """Per-card content for every card that is shown, front to back."""
    return [card_lines(card, now) for card in snapshot.cards[: snapshot.shown_count]]


class BoardRenderer:
    """Renders ``BoardSnapshot`` as Rich terminal output."""

    def __init__(self, console: Console | None = None, listen_url: str | None = None) -> None:
        self.console = console or Console()
        self.hint = f"(POST {listen_url})" if listen_url else HINT

    def render(self, snapshot: BoardSnapshot, now: float | None = None) -> Group:
        """Build the full board renderable: header, summary, one panel per card."""
        if now is None:
            now = time.monotonic()

        header = Text.assemble((TITLE, "bold"), "  ", (self.hint, "dim"))
        parts = [header, Text(summary_text(snapshot)), Text("")]

        shown = snapshot.cards[: snapshot.shown_count]
        for card, lines in zip(shown, board_lines(snapshot, now)):
            body = Group(*(Text(line.text, style=line.style) for line in lines))
            parts.append(
                Panel(
                    body,
                    box=box.ASCII,
                    border_style=_STATE_STYLES[card.state],
                    expand=False,
                )
            )

        return Group(*parts)
