"""Shared pytest fixtures for gitools tests."""

from pathlib import Path

import git
import pytest

from gitools.palette.keymap import Command, Keymap, KeymapLeaf, KeymapNode, key_code


def make_keymap(groups: dict) -> Keymap:
    """Build a keymap from {"b": ("Branch", {"c": ("Checkout", Command...)})}."""
    nodes = []
    for key, (name, children) in groups.items():
        leaves = {
            key_code(child_key): KeymapLeaf(key_code(child_key), child_name, command)
            for child_key, (child_name, command) in children.items()
        }
        nodes.append(KeymapNode(key_code(key), name, leaves))
    return Keymap(nodes)


@pytest.fixture
def keymap() -> Keymap:
    """Branch and tag groups, the shape of the default config."""
    return make_keymap(
        {
            "b": (
                "Branch",
                {
                    "c": ("Checkout", Command.BRANCH_CHECKOUT),
                    "d": ("Delete", Command.BRANCH_DELETE),
                },
            ),
            "t": ("Tag", {"c": ("Checkout", Command.TAG_CHECKOUT)}),
        }
    )


@pytest.fixture
def overlapping_keymap() -> Keymap:
    """Group 'b' has a leaf 't' that is also a root group key."""
    return make_keymap(
        {
            "b": ("Branch", {"t": ("Track", Command.BRANCH_CHECKOUT)}),
            "t": ("Tag", {"c": ("Checkout", Command.TAG_CHECKOUT)}),
        }
    )


def _commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def git_repo(tmp_path) -> git.Repo:
    """Repository with one commit on the default branch."""
    repo = git.Repo.init(tmp_path / "repo")
    with repo.config_writer() as config:
        config.set_value("user", "name", "name")
        config.set_value("user", "email", "email@example.com")
    _commit_file(repo, "foo", "foo\n", "initial")
    return repo


@pytest.fixture
def commit_file():
    return _commit_file
