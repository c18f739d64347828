"""
Repository header and status views.
"""

from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from gitools.utils.git_ops import RepoHeader, RepoStatus


class RepoHeaderView(Static):
    """Head, upstream and tag rows."""

    DEFAULT_CSS = """
    RepoHeaderView {
        height: auto;
        padding: 0 1;
    }
    """

    def show_header(self, header: RepoHeader) -> None:
        table = Table.grid(padding=(0, 1))
        table.add_column(width=8)
        table.add_column()
        table.add_column()
        table.add_row(Text("Head:", style="dim"), Text(header.head, style="cyan"), header.head_message)
        table.add_row(
            Text("Remote:", style="dim"),
            Text(header.upstream, style="green"),
            header.upstream_message,
        )
        table.add_row(Text("Tag:", style="dim"), Text(header.tag, style="yellow"), "")
        self.update(table)


class RepoStatusView(Static):
    """Untracked, unstaged and staged file lists."""

    DEFAULT_CSS = """
    RepoStatusView {
        height: 1fr;
        padding: 1 1;
    }
    """

    def show_status(self, status: RepoStatus) -> None:
        text = Text()
        if status.is_clean:
            text.append("Nothing to commit, working tree clean", style="dim")
            self.update(text)
            return

        sections = [
            ("Untracked files", [("", path) for path in status.untracked]),
            ("Unstaged files", status.unstaged),
            ("Staged files", status.staged),
        ]
        for title, entries in sections:
            if not entries:
                continue
            text.append(f"{title}\n", style="bold blue")
            for kind, path in entries:
                if kind:
                    text.append(f"  {kind:<11}", style="dim")
                else:
                    text.append("  ")
                text.append(f"{path}\n")
            text.append("\n")
        self.update(text)
