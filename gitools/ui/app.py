"""
Textual front end for gitools.

Every key goes through ``translate_key`` into a palette event and is then
handled synchronously by the engine. The widgets re-render from engine
state in the engine's ``on_state_update`` callback.
"""

import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult

from gitools.config.keymap import KeymapConfig
from gitools.palette.cursor import NotReady
from gitools.palette.dispatch import Back, Cancel, Character, ShowMenu
from gitools.palette.engine import (
    Commit,
    CommitOutcome,
    MoveDown,
    MoveUp,
    PaletteEngine,
    PaletteEvent,
)
from gitools.utils.git_ops import GitRepository

from .cheatsheet import CheatSheet
from .fuzzybar import Fuzzybar
from .header import RepoHeaderView, RepoStatusView

logger = logging.getLogger(__name__)

_PALETTE_KEYS = {
    "escape": Cancel(),
    "backspace": Back(),
    "enter": Commit(),
    "down": MoveDown(),
    "ctrl+j": MoveDown(),
    "up": MoveUp(),
    "ctrl+k": MoveUp(),
}


def translate_key(
    key: str, character: Optional[str], palette_open: bool
) -> Optional[PaletteEvent]:
    """Map a Textual key to a palette event, or None if it isn't ours."""
    if key == "space":
        return Character(ord(" ")) if palette_open else ShowMenu()

    if key in _PALETTE_KEYS:
        return _PALETTE_KEYS[key]

    if character and len(character) == 1 and character.isprintable():
        code = ord(character)
        # The keymap only knows single-byte ASCII keys
        if palette_open or code <= 0x7F:
            return Character(code)

    return None


def build_engine(repo: GitRepository, config: KeymapConfig) -> PaletteEngine:
    """Engine wired to a repository as candidate source and executor."""
    return PaletteEngine(
        config.keymap,
        source=repo.candidates,
        executor=repo.execute,
        precedence=config.precedence,
    )


class GitoolsApp(App):
    """Repository overview with the cheat sheet and fuzzy bar at the bottom."""

    TITLE = "Git Tools"

    CSS = """
    Screen {
        layout: vertical;
    }

    #cheatsheet, #fuzzybar {
        display: none;
    }
    """

    def __init__(self, engine: PaletteEngine, repo: Optional[GitRepository] = None, **kwargs):
        super().__init__(**kwargs)
        self.engine = engine
        self.repo = repo
        engine.on_state_update = self._on_state_update

    def compose(self) -> ComposeResult:
        yield RepoHeaderView(id="repo-header")
        yield RepoStatusView(id="repo-status")
        yield CheatSheet(id="cheatsheet")
        yield Fuzzybar(id="fuzzybar")

    def on_mount(self) -> None:
        self.refresh_repo()
        self.render_palette()

    def refresh_repo(self) -> None:
        if self.repo is None:
            return
        self.query_one("#repo-header", RepoHeaderView).show_header(self.repo.header())
        self.query_one("#repo-status", RepoStatusView).show_status(self.repo.status())

    def _on_state_update(self, engine: PaletteEngine) -> None:
        if self.is_running:
            self.render_palette()

    def render_palette(self) -> None:
        self.query_one("#cheatsheet", CheatSheet).show_menu(self.engine.keymap, self.engine.menu)
        self.query_one("#fuzzybar", Fuzzybar).show_palette(self.engine)

    def on_key(self, event: events.Key) -> None:
        palette_event = translate_key(
            event.key, event.character, palette_open=not self.engine.palette.is_hidden
        )
        if palette_event is None:
            return

        event.stop()
        event.prevent_default()

        outcome = self.engine.handle(palette_event)

        if isinstance(outcome, CommitOutcome):
            if outcome.succeeded:
                self.notify(f"{outcome.command.value}: {outcome.choice}")
            else:
                self.notify(f"{outcome.command.value} {outcome.choice} failed", severity="error")
            self.refresh_repo()
        elif isinstance(outcome, NotReady):
            self.notify("No matching item", severity="warning")
