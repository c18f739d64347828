"""
Keymap configuration loader.

Loads the cheat sheet keymap from ~/.config/gitools/keymap.yaml. A missing
file falls back to the built-in default; a malformed one raises
ConfigurationError before the palette engine is ever built.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from gitools.exceptions import ConfigurationError
from gitools.palette.dispatch import Precedence
from gitools.palette.keymap import Command, Keymap, KeymapLeaf, KeymapNode, key_code

from .constants import DEFAULT_KEYMAP_PATH

logger = logging.getLogger(__name__)

# Example config content for new users
EXAMPLE_CONFIG = """# gitools keymap
#
# Press space to open the cheat sheet, then a group key, then a command key.
#
# Format:
#   keymap:
#     <key>:                    # single ASCII character
#       name: <group name>
#       children:
#         <key>: {name: <label>, command: <command>}
#
# Available commands:
#   branch_checkout   - check out a local or remote branch
#   branch_delete     - delete a local branch
#   tag_checkout      - check out a tag (detached HEAD)
#
# precedence decides what happens when a key inside a group is also a
# group key: "leaf" runs the command, "root" switches group.

precedence: leaf

keymap:
  b:
    name: Branch
    children:
      c: {name: Checkout, command: branch_checkout}
      d: {name: Delete, command: branch_delete}
  t:
    name: Tag
    children:
      c: {name: Checkout, command: tag_checkout}
"""

DEFAULT_CONFIG: Dict[str, Any] = yaml.safe_load(EXAMPLE_CONFIG)


@dataclass(frozen=True)
class KeymapConfig:
    """Parsed keymap file."""

    keymap: Keymap
    precedence: Precedence = Precedence.LEAF


def get_config_path() -> Path:
    """Get the path to the keymap config file."""
    return DEFAULT_KEYMAP_PATH


def _parse_key(raw: Any, where: str) -> int:
    # YAML turns bare digits and y/n into ints and bools
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise ConfigurationError(f"Key must be a single character, got {raw!r}", where=where)
    label = str(raw)
    if len(label) != 1:
        raise ConfigurationError(f"Key must be a single character, got {label!r}", where=where)
    code = key_code(label)
    if code > 0x7F:
        raise ConfigurationError(f"Key must be ASCII, got {label!r}", where=where)
    return code


def _parse_name(entry: Dict[str, Any], where: str) -> str:
    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("Missing required field 'name'", where=where)
    return name


def _parse_command(raw: Any, where: str) -> Command:
    try:
        return Command(raw)
    except ValueError:
        valid = ", ".join(c.value for c in Command)
        raise ConfigurationError(
            f"Unknown command {raw!r} (valid: {valid})", where=where
        ) from None


def parse_keymap(data: Any) -> Keymap:
    """
    Build a Keymap from the ``keymap`` mapping of a config document.

    Args:
        data: Mapping of group key -> {name, children}

    Returns:
        The immutable two-level keymap

    Raises:
        ConfigurationError: on any structural problem
    """
    if not isinstance(data, dict) or not data:
        raise ConfigurationError("'keymap' must be a non-empty mapping")

    nodes = []
    for raw_key, entry in data.items():
        where = f"keymap.{raw_key}"
        key = _parse_key(raw_key, where)
        if not isinstance(entry, dict):
            raise ConfigurationError("Group entry must be a mapping", where=where)
        if "command" in entry:
            raise ConfigurationError("Commands are only allowed on second-level keys", where=where)

        children = entry.get("children")
        if not isinstance(children, dict) or not children:
            raise ConfigurationError("Group needs a non-empty 'children' mapping", where=where)

        leaves = {}
        for raw_child, child in children.items():
            child_where = f"{where}.children.{raw_child}"
            child_key = _parse_key(raw_child, child_where)
            if not isinstance(child, dict):
                raise ConfigurationError("Command entry must be a mapping", where=child_where)
            if "children" in child:
                raise ConfigurationError("Keymap is limited to two levels", where=child_where)
            if child_key in leaves:
                raise ConfigurationError("Duplicate key in group", where=child_where)
            leaves[child_key] = KeymapLeaf(
                key=child_key,
                name=_parse_name(child, child_where),
                command=_parse_command(child.get("command"), child_where),
            )

        if any(node.key == key for node in nodes):
            raise ConfigurationError("Duplicate group key", where=where)
        nodes.append(KeymapNode(key=key, name=_parse_name(entry, where), children=leaves))

    return Keymap(nodes)


def parse_config(config: Dict[str, Any]) -> KeymapConfig:
    """Parse a whole config document."""
    if not isinstance(config, dict):
        raise ConfigurationError("Keymap config must be a mapping")

    raw_precedence = config.get("precedence", Precedence.LEAF.value)
    try:
        precedence = Precedence(raw_precedence)
    except ValueError:
        raise ConfigurationError(
            f"Unknown precedence {raw_precedence!r} (valid: leaf, root)"
        ) from None

    return KeymapConfig(keymap=parse_keymap(config.get("keymap")), precedence=precedence)


def load_keymap_config(path: Optional[Path] = None) -> KeymapConfig:
    """
    Load the keymap config file.

    Returns:
        The parsed config, or the built-in default if the file doesn't exist
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.info(f"No keymap at {config_path}, using defaults")
        return parse_config(DEFAULT_CONFIG)

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError("Keymap is not valid YAML", path=str(config_path)) from e
    except OSError as e:
        raise ConfigurationError("Could not read keymap", path=str(config_path)) from e

    if config is None:
        raise ConfigurationError("Keymap file is empty", path=str(config_path))

    try:
        keymap_config = parse_config(config)
    except ConfigurationError as e:
        raise ConfigurationError(e.message, path=str(config_path), **e.context) from e

    logger.info(f"Loaded {len(keymap_config.keymap)} keymap groups from {config_path}")
    return keymap_config


def write_example_config(path: Optional[Path] = None) -> bool:
    """
    Save example config file if it doesn't exist.

    Returns:
        True if file was created, False if it already exists
    """
    config_path = path or get_config_path()

    if config_path.exists():
        return False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(EXAMPLE_CONFIG)
    logger.info(f"Created example keymap config at {config_path}")
    return True
