"""
Palette engine.

Runs one input event through the whole pipeline:

    raw sample -> InputShaper -> event -> KeymapDispatcher
        -> (leaf reached) candidate source -> filter -> SelectionCursor
        -> (commit) command executor

Everything happens synchronously on the caller's thread. The engine owns
the menu and palette state; the host renders it and feeds it events.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import List, Optional, Union

from gitools.exceptions import GitoolsError

from .cursor import NotReady, SelectionCursor
from .debounce import Edge, InputShaper
from .dispatch import (
    Back,
    Cancel,
    Character,
    DispatchResult,
    KeymapDispatcher,
    MenuEvent,
    MenuState,
    Precedence,
    ShowMenu,
)
from .keymap import Command, Keymap
from .matcher import MatchItem, filter_candidates

logger = logging.getLogger(__name__)

CandidateSource = Callable[[Command], Sequence[str]]
CommandExecutor = Callable[[Command, str], bool]


# =============================================================================
# Palette events (only meaningful while the fuzzy bar is open)
# =============================================================================


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class Commit:
    pass


PaletteEvent = Union[MenuEvent, QueryChanged, MoveUp, MoveDown, Commit]


@dataclass
class PaletteState:
    """State of the fuzzy bar."""

    is_hidden: bool = True
    command: Optional[Command] = None
    title: str = ""
    query: str = ""
    source: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommitOutcome:
    """Result of handing the active match to the executor."""

    command: Command
    choice: str
    succeeded: bool


EngineOutcome = Union[DispatchResult, CommitOutcome, NotReady, None]


@dataclass(frozen=True)
class SampleResult:
    """Edge seen by one raw sample and the outcome of the event it fired."""

    edge: Edge
    outcome: EngineOutcome = None


class PaletteEngine:
    """
    Command palette engine.

    Usage:
        engine = PaletteEngine(keymap, repo.candidates, repo.execute)
        engine.handle(ShowMenu())
        engine.handle(Character(ord("b")))
        engine.handle(Character(ord("c")))   # palette opens on branches
        engine.handle(QueryChanged("feat"))
        outcome = engine.handle(Commit())
    """

    def __init__(
        self,
        keymap: Keymap,
        source: CandidateSource,
        executor: CommandExecutor,
        precedence: Precedence = Precedence.LEAF,
        key_events: Sequence[PaletteEvent] = (),
        on_state_update: Optional[Callable[["PaletteEngine"], None]] = None,
    ):
        self.dispatcher = KeymapDispatcher(keymap, precedence)
        self.source = source
        self.executor = executor
        self.key_events = tuple(key_events)
        self.shaper = InputShaper(len(self.key_events))
        self.on_state_update = on_state_update

        self.menu = MenuState()
        self.palette = PaletteState()
        self.cursor = SelectionCursor()

    @property
    def keymap(self) -> Keymap:
        return self.dispatcher.keymap

    @property
    def filtered(self) -> List[MatchItem]:
        return self.cursor.items

    def _notify_update(self) -> None:
        if self.on_state_update:
            self.on_state_update(self)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def sample(self, key_id: int, raw_pressed: bool) -> SampleResult:
        """Feed one raw key sample; a press edge fires the key's event."""
        edge = self.shaper.sample(key_id, raw_pressed)
        if edge is not Edge.PRESS:
            return SampleResult(edge)
        return SampleResult(edge, self.handle(self.key_events[key_id]))

    def handle(self, event: PaletteEvent) -> EngineOutcome:
        """Process one symbolic event to completion."""
        if self.palette.is_hidden:
            outcome = self._handle_menu(event)
        else:
            outcome = self._handle_palette(event)
        self._notify_update()
        return outcome

    def _handle_menu(self, event: PaletteEvent) -> EngineOutcome:
        if not isinstance(event, (ShowMenu, Cancel, Back, Character)):
            logger.debug(f"Ignoring {event!r}, palette is closed")
            return None

        result = self.dispatcher.dispatch(self.menu, event)
        if result is not None:
            self.open_palette(result)
        return result

    def _handle_palette(self, event: PaletteEvent) -> EngineOutcome:
        if isinstance(event, Cancel):
            self.close_palette()
        elif isinstance(event, Back):
            self.set_query(self.palette.query[:-1])
        elif isinstance(event, Character):
            self.set_query(self.palette.query + chr(event.code))
        elif isinstance(event, QueryChanged):
            self.set_query(event.query)
        elif isinstance(event, MoveDown):
            self.cursor.move_down()
        elif isinstance(event, MoveUp):
            self.cursor.move_up()
        elif isinstance(event, Commit):
            return self.commit()
        else:
            logger.debug(f"Ignoring {event!r} while palette is open")
        return None

    # -------------------------------------------------------------------------
    # Palette
    # -------------------------------------------------------------------------

    def open_palette(self, result: DispatchResult) -> None:
        """Load candidates for ``result.command`` and show the fuzzy bar."""
        try:
            source = list(self.source(result.command))
        except GitoolsError as e:
            logger.error(f"Could not load candidates for {result.command.value}: {e}")
            source = []

        self.palette = PaletteState(
            is_hidden=False,
            command=result.command,
            title=result.name,
            source=source,
        )
        self.refilter()
        logger.info(f"Opened palette for {result.command.value} with {len(source)} candidates")

    def set_query(self, query: str) -> None:
        self.palette.query = query
        self.refilter()

    def refilter(self) -> None:
        self.cursor.load(filter_candidates(self.palette.source, self.palette.query))

    def close_palette(self) -> None:
        """Hide the fuzzy bar and send the menu back to its first level."""
        self.palette.is_hidden = True
        self.cursor.reset_selection()
        self.dispatcher.reset(self.menu)

    def commit(self) -> Union[CommitOutcome, NotReady]:
        """Hand the active match to the executor, then close the palette."""
        choice = self.cursor.commit()
        if isinstance(choice, NotReady):
            logger.info(f"Nothing to commit for query {self.palette.query!r}")
            return choice

        command = self.palette.command
        try:
            succeeded = bool(self.executor(command, choice))
        except GitoolsError as e:
            logger.error(f"{command.value} {choice!r} failed: {e}")
            succeeded = False

        if succeeded:
            logger.info(f"{command.value} {choice!r} succeeded")
        else:
            logger.warning(f"{command.value} {choice!r} reported failure")

        self.close_palette()
        return CommitOutcome(command, choice, succeeded)
