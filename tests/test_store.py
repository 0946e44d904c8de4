import pytest

from world.seed_util import child_rngs, make_rng, resolve_seed
from world.store import Frame, SimulationStore, VisibleCell


def _frame(tick: int) -> Frame:
    cell = VisibleCell((0, 0), (4, 4), None, None, None, 0.0, False)
    return Frame(tick=tick, offset=(4, 4), size=(1, 1), player=(4, 4), cells=(cell,))


def test_subscribers_get_every_frame_in_order() -> None:
    store = SimulationStore()
    got = []
    store.subscribe(lambda f: got.append(f.tick))
    store.publish(_frame(1))
    store.publish(_frame(2))
    assert got == [1, 2]
    assert store.latest.tick == 2


def test_unsubscribe_twice_is_harmless() -> None:
    store = SimulationStore()
    got = []
    off = store.subscribe(got.append)
    off()
    off()
    store.publish(_frame(1))
    assert got == []


def test_clear_drops_all_subscribers() -> None:
    store = SimulationStore()
    got = []
    store.subscribe(got.append)
    store.clear()
    store.publish(_frame(3))
    assert got == []
    assert store.latest.tick == 3


def test_frames_are_immutable() -> None:
    frame = _frame(1)
    with pytest.raises(AttributeError):
        frame.tick = 2
    assert frame.occupied() == ()


def test_seeds() -> None:
    assert resolve_seed(5) == 5
    assert 0 <= resolve_seed(-1) < 2**31
    with pytest.raises(ValueError):
        resolve_seed(-2)
    a, used = make_rng(9)
    b, _ = make_rng(9)
    assert used == 9
    assert a.random() == b.random()
    (c1, c2), used = child_rngs(9, 2)
    assert used == 9
    assert c1.random() != c2.random()
