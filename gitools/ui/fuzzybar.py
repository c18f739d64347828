"""
Fuzzy bar: query line plus the visible window of matches.

The widget only renders engine state; keys go through the app so the
engine stays the single owner of the query, the matches and the cursor.
"""

from rich.text import Text
from textual.widgets import Static

from gitools.palette.engine import PaletteEngine


class Fuzzybar(Static):
    """Query prompt and the viewport's slice of the filtered matches."""

    DEFAULT_CSS = """
    Fuzzybar {
        height: auto;
        padding: 0 1;
        background: $surface;
        border-top: solid $accent;
    }
    """

    def show_palette(self, engine: PaletteEngine) -> None:
        palette = engine.palette
        if palette.is_hidden:
            self.display = False
            return

        cursor = engine.cursor
        text = Text()
        text.append(f"{palette.title} ", style="bold")
        text.append("> ")
        text.append(palette.query or "Search...", style="" if palette.query else "dim")
        text.append("\n")

        if not cursor.items:
            text.append("No matches", style="dim italic")
        for row in cursor.viewport.visible():
            item = cursor.items[row]
            style = "reverse" if item.is_active else ""
            text.append(f"{item.text}\n", style=style)

        self.update(text)
        self.display = True
