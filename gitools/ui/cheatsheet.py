"""
Cheat sheet: shows the key labels of the current keymap level.
"""

from rich.text import Text
from textual.widgets import Static

from gitools.palette.dispatch import MenuState
from gitools.palette.keymap import Keymap


class CheatSheet(Static):
    """Renders `key -> name` pairs for level 1, or for the selected group."""

    DEFAULT_CSS = """
    CheatSheet {
        height: auto;
        max-height: 8;
        padding: 1 1;
        background: $surface;
        border-top: solid $primary;
    }
    """

    def show_menu(self, keymap: Keymap, menu: MenuState) -> None:
        if menu.is_hidden:
            self.display = False
            return

        text = Text()
        if menu.parent is not None:
            node = keymap.node(menu.parent)
            if node is not None:
                text.append(f"{node.name}\n", style="bold")

        for i, (label, name) in enumerate(keymap.labels(menu.parent)):
            if i:
                text.append("   ")
            text.append(label, style="bold blue")
            text.append(f" -> {name}", style="green")

        self.update(text)
        self.display = True
