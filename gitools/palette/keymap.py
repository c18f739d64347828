"""
Keymap tree for the cheat sheet menu.

The tree has exactly two levels: a root map of group nodes (level 1) whose
children are leaves carrying a command (level 2). Keys are single-byte key
codes. The tree is built once at startup and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple


class Command(Enum):
    """Commands reachable from the palette."""

    BRANCH_CHECKOUT = "branch_checkout"
    BRANCH_DELETE = "branch_delete"
    TAG_CHECKOUT = "tag_checkout"


def key_label(key: int) -> str:
    """Printable label for a key code."""
    return chr(key)


def key_code(label: str) -> int:
    """Key code for a one-character label."""
    return ord(label)


@dataclass(frozen=True)
class KeymapLeaf:
    """Level 2 entry: pressing ``key`` runs ``command``."""

    key: int
    name: str
    command: Command


@dataclass(frozen=True)
class KeymapNode:
    """Level 1 entry: pressing ``key`` opens the ``children`` group."""

    key: int
    name: str
    children: Mapping[int, KeymapLeaf] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def child(self, key: int) -> Optional[KeymapLeaf]:
        return self.children.get(key)


class Keymap:
    """Immutable two-level keymap.

    Usage:
        keymap = Keymap([
            KeymapNode(key_code("b"), "Branch", {
                key_code("c"): KeymapLeaf(key_code("c"), "Checkout", Command.BRANCH_CHECKOUT),
            }),
        ])
        node = keymap.node(key_code("b"))
    """

    def __init__(self, nodes=()):
        root: Dict[int, KeymapNode] = {}
        for node in nodes:
            root[node.key] = node
        self._root = MappingProxyType(root)

    @property
    def root(self) -> Mapping[int, KeymapNode]:
        return self._root

    def node(self, key: int) -> Optional[KeymapNode]:
        return self._root.get(key)

    def labels(self, parent: Optional[int] = None) -> List[Tuple[str, str]]:
        """(key label, name) pairs for the root, or for one group."""
        if parent is None:
            return [(key_label(k), n.name) for k, n in self._root.items()]
        node = self._root.get(parent)
        if node is None:
            return []
        return [(key_label(k), leaf.name) for k, leaf in node.children.items()]

    def leaves(self) -> Iterator[Tuple[KeymapNode, KeymapLeaf]]:
        for node in self._root.values():
            for leaf in node.children.values():
                yield node, leaf

    def __len__(self) -> int:
        return len(self._root)

    def __contains__(self, key: int) -> bool:
        return key in self._root
