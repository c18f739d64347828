"""Tests for the shift-register input shaper."""

import pytest

from gitools.palette.debounce import Edge, InputShaper


def feed(shaper: InputShaper, key_id: int, samples) -> list:
    return [shaper.sample(key_id, s) for s in samples]


class TestPressEdge:
    def test_sustained_press_emits_once_on_third_sample(self):
        shaper = InputShaper(1)
        edges = feed(shaper, 0, [True] * 8)

        assert edges.count(Edge.PRESS) == 1
        assert edges.index(Edge.PRESS) == 2
        assert Edge.RELEASE not in edges
        assert shaper.register(0) == 0xFF

    def test_register_locks_after_press(self):
        shaper = InputShaper(1)
        feed(shaper, 0, [True] * 3)
        for _ in range(10):
            assert shaper.sample(0, True) is Edge.NONE
            assert shaper.register(0) == 0xFF

    def test_two_samples_are_not_enough(self):
        shaper = InputShaper(1)
        assert feed(shaper, 0, [True, True, False]) == [Edge.NONE] * 3


class TestReleaseEdge:
    def test_press_then_release_sequence(self):
        shaper = InputShaper(1)
        edges = feed(shaper, 0, [True, True, True, False, False, False])
        assert edges == [
            Edge.NONE,
            Edge.NONE,
            Edge.PRESS,
            Edge.NONE,
            Edge.NONE,
            Edge.RELEASE,
        ]

    def test_sustained_release_locks_at_zero(self):
        shaper = InputShaper(1)
        feed(shaper, 0, [True] * 8)
        edges = feed(shaper, 0, [False] * 8)

        assert edges.count(Edge.RELEASE) == 1
        assert edges.index(Edge.RELEASE) == 2
        assert shaper.register(0) == 0x00

    def test_idle_key_never_releases(self):
        shaper = InputShaper(1)
        assert feed(shaper, 0, [False] * 10) == [Edge.NONE] * 10
        assert shaper.register(0) == 0


class TestNoise:
    def test_single_glitch_during_hold_is_ignored(self):
        shaper = InputShaper(1)
        feed(shaper, 0, [True] * 3)
        edges = feed(shaper, 0, [False, True, True, True, True])
        assert Edge.RELEASE not in edges
        assert Edge.PRESS not in edges

    def test_short_blip_never_fires(self):
        shaper = InputShaper(1)
        edges = feed(shaper, 0, [True, True] + [False] * 5)
        assert edges == [Edge.NONE] * 7

    def test_press_fires_once_blip_history_shifts_out(self):
        shaper = InputShaper(1)
        edges = feed(shaper, 0, [True] + [False] * 5 + [True] * 3)
        assert edges[-1] is Edge.PRESS
        assert edges.count(Edge.PRESS) == 1


class TestRegisters:
    def test_keys_are_independent(self):
        shaper = InputShaper(2)
        feed(shaper, 0, [True] * 3)
        assert shaper.register(0) == 0xFF
        assert shaper.register(1) == 0

    def test_reset_single_and_all(self):
        shaper = InputShaper(2)
        feed(shaper, 0, [True] * 3)
        feed(shaper, 1, [True] * 3)

        shaper.reset(0)
        assert shaper.register(0) == 0
        assert shaper.register(1) == 0xFF

        shaper.reset()
        assert shaper.register(1) == 0

    def test_key_count(self):
        assert InputShaper(4).key_count == 4

    def test_negative_key_count_rejected(self):
        with pytest.raises(ValueError):
            InputShaper(-1)

    def test_unknown_key_id(self):
        with pytest.raises(IndexError):
            InputShaper(1).sample(3, True)
