from __future__ import annotations

from tetromino_rl.game.pieces import TetrominoType
from tetromino_rl.game.randomizer import BagRandomizer, draw


def test_bag_is_permutation_of_all_kinds():
    rnd = BagRandomizer()
    state = rnd.seed_state(3)
    for _ in range(20):
        bag, state = rnd.next_bag(state)
        assert sorted(bag) == sorted(TetrominoType)


def test_same_seed_same_bags():
    rnd = BagRandomizer()
    a = rnd.seed_state(42)
    b = rnd.seed_state(42)
    bags_a, bags_b = [], []
    for _ in range(5):
        bag, a = rnd.next_bag(a)
        bags_a.append(bag)
        bag, b = rnd.next_bag(b)
        bags_b.append(bag)
    assert bags_a == bags_b


def test_same_state_deals_same_bag():
    rnd = BagRandomizer()
    state = rnd.seed_state(5)
    first, after_first = rnd.next_bag(state)
    again, after_again = rnd.next_bag(state)
    assert first == again
    assert after_first == after_again
    assert after_first != state


def test_draw_from_empty_queue_refills():
    rnd = BagRandomizer()
    kind, rest, _ = draw((), rnd, rnd.seed_state(1))
    assert kind in TetrominoType
    assert len(rest) == 13


def test_draw_takes_front():
    rnd = BagRandomizer()
    state = rnd.seed_state(1)
    queue = tuple(TetrominoType)[::-1] + tuple(TetrominoType)
    kind, rest, new_state = draw(queue, rnd, state)
    assert kind == TetrominoType.Z
    assert rest == queue[1:]
    assert new_state == state


def test_draw_replays_from_same_state():
    rnd = BagRandomizer()
    state = rnd.seed_state(9)
    queue = tuple(TetrominoType)
    assert draw(queue, rnd, state) == draw(queue, rnd, state)


def test_queue_never_starves():
    rnd = BagRandomizer()
    state = rnd.seed_state(7)
    queue = ()
    for _ in range(200):
        _, queue, state = draw(queue, rnd, state)
        assert len(queue) >= 7
