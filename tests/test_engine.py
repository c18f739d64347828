"""Tests for the palette engine pipeline."""

from unittest.mock import Mock

import pytest

from gitools.exceptions import GitCommandError
from gitools.palette.cursor import NotReady
from gitools.palette.debounce import Edge
from gitools.palette.dispatch import HIDDEN, LEVEL1, Back, Cancel, Character, DispatchResult, ShowMenu
from gitools.palette.engine import (
    Commit,
    CommitOutcome,
    MoveDown,
    MoveUp,
    PaletteEngine,
    QueryChanged,
    SampleResult,
)
from gitools.palette.keymap import Command

BRANCHES = ["main", "b1", "b2", "feature/login", "origin/main"]


def ch(label: str) -> Character:
    return Character(ord(label))


@pytest.fixture
def source():
    return Mock(side_effect=lambda command: list(BRANCHES))


@pytest.fixture
def executor():
    return Mock(return_value=True)


@pytest.fixture
def engine(keymap, source, executor) -> PaletteEngine:
    return PaletteEngine(keymap, source, executor)


def open_checkout(engine: PaletteEngine) -> None:
    for event in (ShowMenu(), ch("b"), ch("c")):
        engine.handle(event)


class TestOpeningThePalette:
    def test_leaf_opens_palette_with_all_candidates(self, engine, source):
        engine.handle(ShowMenu())
        engine.handle(ch("b"))
        outcome = engine.handle(ch("c"))

        assert outcome == DispatchResult(Command.BRANCH_CHECKOUT, "Checkout")
        source.assert_called_once_with(Command.BRANCH_CHECKOUT)
        assert engine.menu.state == HIDDEN
        assert not engine.palette.is_hidden
        assert engine.palette.title == "Checkout"
        assert [i.text for i in engine.filtered] == BRANCHES
        assert engine.filtered[0].is_active

    def test_palette_events_ignored_while_closed(self, engine):
        assert engine.handle(MoveDown()) is None
        assert engine.handle(Commit()) is None
        assert engine.palette.is_hidden

    def test_source_failure_opens_empty_palette(self, keymap, executor):
        failing = Mock(side_effect=GitCommandError("boom"))
        engine = PaletteEngine(keymap, failing, executor)
        open_checkout(engine)

        assert not engine.palette.is_hidden
        assert engine.filtered == []


class TestQuery:
    def test_typing_filters(self, engine):
        open_checkout(engine)
        engine.handle(ch("b"))
        engine.handle(ch("1"))

        assert engine.palette.query == "b1"
        assert [i.text for i in engine.filtered] == ["b1"]

    def test_back_deletes_last_character(self, engine):
        open_checkout(engine)
        engine.handle(QueryChanged("b1"))
        engine.handle(Back())

        assert engine.palette.query == "b"
        assert [i.text for i in engine.filtered] == ["b1", "b2"]

    def test_query_change_resets_cursor(self, engine):
        open_checkout(engine)
        engine.handle(MoveDown())
        engine.handle(MoveDown())
        engine.handle(QueryChanged("main"))

        assert engine.cursor.active_index == 0
        assert engine.filtered[0].text == "main"

    def test_show_menu_ignored_while_palette_open(self, engine):
        open_checkout(engine)
        engine.handle(ShowMenu())
        assert engine.menu.state == HIDDEN
        assert engine.palette.query == ""


class TestCommit:
    def test_commit_hands_choice_to_executor(self, engine, executor):
        open_checkout(engine)
        engine.handle(QueryChanged("b1"))

        outcome = engine.handle(Commit())

        assert outcome == CommitOutcome(Command.BRANCH_CHECKOUT, "b1", True)
        executor.assert_called_once_with(Command.BRANCH_CHECKOUT, "b1")

    def test_commit_closes_palette_and_resets_menu(self, engine):
        open_checkout(engine)
        engine.handle(MoveDown())
        engine.handle(Commit())

        assert engine.palette.is_hidden
        assert engine.cursor.active_index == 0
        assert engine.menu.parent is None

        engine.handle(ShowMenu())
        assert engine.menu.state == LEVEL1

    def test_commit_after_moving(self, engine, executor):
        open_checkout(engine)
        engine.handle(MoveDown())
        engine.handle(MoveDown())
        engine.handle(MoveUp())
        engine.handle(Commit())
        executor.assert_called_once_with(Command.BRANCH_CHECKOUT, "b1")

    def test_commit_with_no_matches_is_not_ready(self, engine, executor):
        open_checkout(engine)
        engine.handle(QueryChanged("does-not-exist"))

        outcome = engine.handle(Commit())

        assert isinstance(outcome, NotReady)
        executor.assert_not_called()
        assert not engine.palette.is_hidden

    def test_executor_failure_is_reported_not_raised(self, keymap, source):
        executor = Mock(return_value=False)
        engine = PaletteEngine(keymap, source, executor)
        open_checkout(engine)

        outcome = engine.handle(Commit())

        assert outcome == CommitOutcome(Command.BRANCH_CHECKOUT, "main", False)
        assert engine.palette.is_hidden

    def test_executor_exception_is_caught(self, keymap, source):
        executor = Mock(side_effect=GitCommandError("locked"))
        engine = PaletteEngine(keymap, source, executor)
        open_checkout(engine)

        outcome = engine.handle(Commit())
        assert outcome.succeeded is False


class TestCancel:
    def test_cancel_closes_palette(self, engine, executor):
        open_checkout(engine)
        engine.handle(MoveDown())
        engine.handle(Cancel())

        assert engine.palette.is_hidden
        assert engine.cursor.active_index == 0
        assert engine.menu.state == HIDDEN
        executor.assert_not_called()

    def test_cancel_with_empty_matches(self, engine):
        open_checkout(engine)
        engine.handle(QueryChanged("zzz"))
        engine.handle(Cancel())
        assert engine.palette.is_hidden


def tap(engine: PaletteEngine, key_id: int) -> SampleResult:
    """Press and release a key; return the result of the press edge."""
    pressed = [engine.sample(key_id, True) for _ in range(3)]
    released = [engine.sample(key_id, False) for _ in range(3)]
    assert [r.edge for r in pressed] == [Edge.NONE, Edge.NONE, Edge.PRESS]
    assert released[-1].edge is Edge.RELEASE
    assert all(r.outcome is None for r in released)
    return pressed[-1]


class TestSampling:
    def test_press_edges_drive_the_pipeline(self, keymap, source, executor):
        engine = PaletteEngine(
            keymap,
            source,
            executor,
            key_events=[ShowMenu(), ch("b"), ch("c"), Commit()],
        )

        assert tap(engine, 0).outcome is None
        assert tap(engine, 1).outcome is None
        assert tap(engine, 2).outcome == DispatchResult(Command.BRANCH_CHECKOUT, "Checkout")
        assert tap(engine, 3).outcome == CommitOutcome(Command.BRANCH_CHECKOUT, "main", True)

        executor.assert_called_once_with(Command.BRANCH_CHECKOUT, "main")

    def test_commit_on_empty_matches_reports_not_ready(self, keymap, source, executor):
        engine = PaletteEngine(
            keymap,
            source,
            executor,
            key_events=[ShowMenu(), ch("b"), ch("c"), ch("z"), Commit()],
        )
        for key_id in range(4):
            tap(engine, key_id)
        assert engine.palette.query == "z"
        assert engine.filtered == []

        result = tap(engine, 4)

        assert isinstance(result.outcome, NotReady)
        assert not engine.palette.is_hidden
        executor.assert_not_called()

    def test_non_press_samples_carry_no_outcome(self, keymap, source, executor):
        engine = PaletteEngine(keymap, source, executor, key_events=[ShowMenu()])
        assert engine.sample(0, True) == SampleResult(Edge.NONE)

    def test_held_key_fires_once(self, keymap, source, executor):
        engine = PaletteEngine(keymap, source, executor, key_events=[ShowMenu(), Back()])
        for _ in range(3):
            engine.sample(0, True)
        assert engine.menu.state == LEVEL1

        for _ in range(20):
            engine.sample(1, True)
        assert engine.menu.state == HIDDEN


class TestStateUpdates:
    def test_callback_runs_per_event(self, keymap, source, executor):
        callback = Mock()
        engine = PaletteEngine(keymap, source, executor, on_state_update=callback)

        engine.handle(ShowMenu())
        engine.handle(ch("z"))

        assert callback.call_count == 2
        callback.assert_called_with(engine)
