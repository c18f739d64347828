"""
Centralized constants for gitools.

Debounce masks, result caps and scroll thresholds are kept here so the
palette engine can be tuned (and tested) independently of the widgets that
render it.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

GITOOLS_CONFIG_DIR = Path(
    os.environ.get("GITOOLS_CONFIG_DIR", str(Path.home() / ".config" / "gitools"))
)
DEFAULT_KEYMAP_PATH = GITOOLS_CONFIG_DIR / "keymap.yaml"
LOG_FILE_NAME = "gitools.log"

# =============================================================================
# INPUT SHAPER (debounce)
# =============================================================================

REGISTER_MASK = 0xFF  # 8 samples of history per key
EDGE_MASK = 0b11000111  # two oldest and three newest samples
PRESS_PATTERN = 0b00000111  # released, then 3 confirming pressed samples
RELEASE_PATTERN = 0b11000000  # pressed, then 3 confirming released samples
LOCKED_PRESSED = 0xFF
LOCKED_RELEASED = 0x00

# =============================================================================
# MATCH FILTER
# =============================================================================

MAX_MATCHES = 20  # Max items shown in the fuzzy bar

# =============================================================================
# SELECTION CURSOR & VIEWPORT
# =============================================================================

FUZZYBAR_HEIGHT = 200  # px
LABEL_HEIGHT = 24  # px per match row
VISIBLE_ROWS = FUZZYBAR_HEIGHT // LABEL_HEIGHT  # 8 rows fit on screen

ADVANCE_THRESHOLD = 8  # scroll down once the cursor reaches this row
RETREAT_THRESHOLD = 12  # scroll up while the cursor is at or above this row

# =============================================================================
# GIT DISPLAY PLACEHOLDERS
# =============================================================================

NO_UPSTREAM = "<no-upstream>"
NO_TAGS = "<no-tags>"

# Status kind labels
ST_NEW = "new"
ST_MODIFIED = "modified"
ST_RENAMED = "renamed"
ST_DELETED = "deleted"
ST_TYPECHANGE = "typechange"
