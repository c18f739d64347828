"""
Selection cursor and viewport for the fuzzy bar.

The cursor keeps exactly one match active and asks the viewport to scroll
by one row once it moves past the advance/retreat thresholds. Operations
that need an active item (``commit``, ``reset_selection``) return a
``NotReady`` outcome on an empty list instead of indexing into it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

from gitools.config.constants import ADVANCE_THRESHOLD, RETREAT_THRESHOLD, VISIBLE_ROWS

from .matcher import MatchItem

logger = logging.getLogger(__name__)


class ScrollRequest(Enum):
    """Viewport scroll requested by a cursor move."""

    NONE = 0
    DOWN = 1
    UP = -1


@dataclass(frozen=True)
class NotReady:
    """Returned when an operation needs an active item and there is none."""

    reason: str = "no matches"


@dataclass
class Viewport:
    """Visible window of ``visible_rows`` rows over ``row_count`` rows."""

    visible_rows: int = VISIBLE_ROWS
    row_count: int = 0
    offset: int = 0

    @property
    def max_offset(self) -> int:
        return max(0, self.row_count - self.visible_rows)

    def scroll(self, rows: int) -> bool:
        """Move the window by ``rows``; True if the offset changed."""
        new_offset = max(0, min(self.offset + rows, self.max_offset))
        moved = new_offset != self.offset
        self.offset = new_offset
        return moved

    def reset(self, row_count: Optional[int] = None) -> None:
        if row_count is not None:
            self.row_count = row_count
        self.offset = 0

    def visible(self) -> range:
        """Row indexes currently on screen."""
        return range(self.offset, min(self.offset + self.visible_rows, self.row_count))


class SelectionCursor:
    """
    Tracks the active match.

    Invariant while ``items`` is non-empty: ``0 <= active_index < len(items)``
    and only ``items[active_index]`` has ``is_active`` set.
    """

    def __init__(
        self,
        viewport: Optional[Viewport] = None,
        advance_threshold: int = ADVANCE_THRESHOLD,
        retreat_threshold: int = RETREAT_THRESHOLD,
    ):
        self.viewport = viewport or Viewport()
        self.advance_threshold = advance_threshold
        self.retreat_threshold = retreat_threshold
        self.items: List[MatchItem] = []
        self.active_index = 0
        self.scrolled = False

    def load(self, items: Sequence[MatchItem]) -> None:
        """Replace the filtered list and start again from the first row."""
        self.items = list(items)
        self.active_index = 0
        self.scrolled = False
        self.viewport.reset(len(self.items))
        for i, item in enumerate(self.items):
            item.is_active = i == 0

    @property
    def active_item(self) -> Optional[MatchItem]:
        if not self.items:
            return None
        return self.items[self.active_index]

    def _activate(self, index: int) -> None:
        self.items[self.active_index].is_active = False
        self.items[index].is_active = True
        self.active_index = index

    def move_down(self) -> ScrollRequest:
        """Activate the next match, scrolling once past the advance threshold."""
        if not self.items or self.active_index + 1 == len(self.items):
            return ScrollRequest.NONE

        self._activate(self.active_index + 1)

        if self.active_index < self.advance_threshold:
            return ScrollRequest.NONE

        moved = self.viewport.scroll(ScrollRequest.DOWN.value)
        self.scrolled = self.scrolled or moved
        return ScrollRequest.DOWN

    def move_up(self) -> ScrollRequest:
        """Activate the previous match, scrolling while inside the retreat threshold."""
        if not self.items or self.active_index == 0:
            return ScrollRequest.NONE

        self._activate(self.active_index - 1)

        if self.active_index > self.retreat_threshold:
            return ScrollRequest.NONE

        self.scrolled = self.viewport.scroll(ScrollRequest.UP.value)
        return ScrollRequest.UP

    def reset_selection(self) -> Union[None, NotReady]:
        """Activate the first match and scroll back to the top."""
        if not self.items:
            logger.debug("reset_selection on an empty match list")
            return NotReady("reset_selection on an empty match list")

        self._activate(0)
        self.scrolled = False
        self.viewport.reset()
        return None

    def commit(self) -> Union[str, NotReady]:
        """Text of the active match."""
        if not self.items:
            logger.debug("commit on an empty match list")
            return NotReady("commit on an empty match list")
        return self.items[self.active_index].text
