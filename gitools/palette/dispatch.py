"""
Keymap dispatch state machine.

Walks the two-level keymap in response to symbolic events:

    Hidden --ShowMenu--> Level1Active --Character(k)--> Level2Active(k)
    Level2Active(k) --Character(c) in children(k)--> command emitted, Hidden

The mutable menu state is owned by the caller and passed into every
``dispatch`` call; the dispatcher itself only holds the immutable keymap.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .keymap import Command, Keymap, key_label

logger = logging.getLogger(__name__)


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class ShowMenu:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Character:
    code: int


MenuEvent = Union[ShowMenu, Cancel, Back, Character]


# =============================================================================
# State
# =============================================================================


class DispatchLevel(Enum):
    HIDDEN = "hidden"
    LEVEL1 = "level1"
    LEVEL2 = "level2"


@dataclass(frozen=True)
class DispatchState:
    """Observable state: the level plus the selected group on level 2."""

    level: DispatchLevel
    parent: Optional[int] = None


HIDDEN = DispatchState(DispatchLevel.HIDDEN)
LEVEL1 = DispatchState(DispatchLevel.LEVEL1)


def level2(parent: int) -> DispatchState:
    return DispatchState(DispatchLevel.LEVEL2, parent)


@dataclass
class MenuState:
    """Mutable menu state.

    The hidden flag and the level are independent: showing a hidden menu
    brings it back at whatever level it was left on.
    """

    is_hidden: bool = True
    parent: Optional[int] = None  # None means level 1

    @property
    def state(self) -> DispatchState:
        if self.is_hidden:
            return HIDDEN
        if self.parent is None:
            return LEVEL1
        return level2(self.parent)


@dataclass(frozen=True)
class DispatchResult:
    """A resolved leaf."""

    command: Command
    name: str


class Precedence(Enum):
    """Which match wins when a level 2 character is both a leaf and a root key."""

    LEAF = "leaf"
    ROOT = "root"


# =============================================================================
# Dispatcher
# =============================================================================


class KeymapDispatcher:
    """Resolves menu events against a keymap."""

    def __init__(self, keymap: Keymap, precedence: Precedence = Precedence.LEAF):
        self.keymap = keymap
        self.precedence = precedence

    def dispatch(self, menu: MenuState, event: MenuEvent) -> Optional[DispatchResult]:
        """Apply one event to ``menu``; return the command if a leaf was reached."""
        if isinstance(event, ShowMenu):
            menu.is_hidden = False
            return None

        if menu.is_hidden:
            logger.debug(f"Ignoring {event!r} while menu is hidden")
            return None

        if isinstance(event, Cancel):
            menu.is_hidden = True
            menu.parent = None
            return None

        if isinstance(event, Back):
            if menu.parent is not None:
                menu.parent = None
            else:
                menu.is_hidden = True
            return None

        if isinstance(event, Character):
            return self._character(menu, event.code)

        logger.debug(f"Unrecognized menu event {event!r}")
        return None

    def reset(self, menu: MenuState) -> None:
        """Return to level 1 without touching visibility."""
        menu.parent = None

    def _character(self, menu: MenuState, code: int) -> Optional[DispatchResult]:
        if menu.parent is not None:
            node = self.keymap.node(menu.parent)
            leaf = node.child(code) if node is not None else None
            if leaf is not None:
                root_hit = code in self.keymap
                if root_hit and self.precedence is Precedence.ROOT:
                    logger.debug(
                        f"Key {key_label(code)!r} matches both a leaf and a group, "
                        f"root precedence selects the group"
                    )
                else:
                    menu.is_hidden = True
                    logger.info(f"Dispatched {leaf.command.value} ({node.name} > {leaf.name})")
                    return DispatchResult(leaf.command, leaf.name)

        if code in self.keymap:
            menu.parent = code
            logger.debug(f"Entered group {self.keymap.node(code).name!r}")
            return None

        logger.debug(f"No binding for key {key_label(code)!r} in state {menu.state}")
        return None
