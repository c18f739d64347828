"""
Command palette engine.

Provides:
- InputShaper: shift-register key debouncing
- Keymap / KeymapDispatcher: two-level shortcut tree and its state machine
- filter_candidates: bounded substring filter
- SelectionCursor / Viewport: active match tracking and scrolling
- PaletteEngine: the event pipeline tying them together
"""

from .cursor import NotReady, ScrollRequest, SelectionCursor, Viewport
from .debounce import Edge, InputShaper
from .dispatch import (
    Back,
    Cancel,
    Character,
    DispatchResult,
    DispatchState,
    KeymapDispatcher,
    MenuState,
    Precedence,
    ShowMenu,
)
from .engine import (
    Commit,
    CommitOutcome,
    MoveDown,
    MoveUp,
    PaletteEngine,
    PaletteState,
    QueryChanged,
    SampleResult,
)
from .keymap import Command, Keymap, KeymapLeaf, KeymapNode, key_code, key_label
from .matcher import MatchItem, filter_candidates

__all__ = [
    "Back",
    "Cancel",
    "Character",
    "Command",
    "Commit",
    "CommitOutcome",
    "DispatchResult",
    "DispatchState",
    "Edge",
    "InputShaper",
    "Keymap",
    "KeymapDispatcher",
    "KeymapLeaf",
    "KeymapNode",
    "MatchItem",
    "MenuState",
    "MoveDown",
    "MoveUp",
    "NotReady",
    "PaletteEngine",
    "PaletteState",
    "Precedence",
    "QueryChanged",
    "SampleResult",
    "ScrollRequest",
    "SelectionCursor",
    "ShowMenu",
    "Viewport",
    "filter_candidates",
    "key_code",
    "key_label",
]
