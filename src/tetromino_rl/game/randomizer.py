from __future__ import annotations

import random
from typing import Any, Hashable, Optional, Protocol, Sequence, Tuple

from .pieces import TetrominoType


Queue = Tuple[TetrominoType, ...]
RngState = Hashable


class Randomizer(Protocol):
    """Stateless bag source; all entropy travels in the returned state value."""

    def seed_state(self, seed: Optional[int] = None) -> RngState:
        ...

    def next_bag(self, rng_state: RngState) -> Tuple[Sequence[TetrominoType], RngState]:
        ...


class BagRandomizer:
    """7-bag generator: every bag is a uniform permutation of all seven kinds.

    The generator keeps nothing between calls. Its entropy is the
    ``random.Random.getstate()`` tuple, which is rebuilt into a generator on
    each bag, so the same state always deals the same bag.
    """

    def seed_state(self, seed: Optional[int] = None) -> RngState:
        return random.Random(seed).getstate()

    def next_bag(self, rng_state: Any) -> Tuple[Queue, RngState]:
        rng = random.Random()
        rng.setstate(rng_state)
        bag = list(TetrominoType)
        rng.shuffle(bag)
        return tuple(bag), rng.getstate()


def draw(queue: Queue, randomizer: Randomizer, rng_state: RngState,
         threshold: int = 7) -> Tuple[TetrominoType, Queue, RngState]:
    """Pop the front kind and top the queue up with a fresh bag when it runs low."""
    if not queue:
        bag, rng_state = randomizer.next_bag(rng_state)
        queue = tuple(bag)
    kind, rest = queue[0], queue[1:]
    if len(rest) <= threshold:
        bag, rng_state = randomizer.next_bag(rng_state)
        rest = rest + tuple(bag)
    return kind, rest, rng_state
