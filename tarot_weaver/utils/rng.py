"""RNG utilities for card sampling, seeded or fresh."""

import hashlib
import random
from typing import List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick an index and flip a coin; random.Random qualifies."""

    def randrange(self, stop: int) -> int: ...

    def random(self) -> float: ...


def seeded_random(seed: str, salt: str = "") -> random.Random:
    """Deterministic source for `seed`, kept apart per `salt` (the category id on the draw route)."""
    digest = hashlib.sha256(f"{salt}:{seed}".encode("utf-8")).digest()
    # whole 256-bit digest seeds the generator; random.Random takes ints of any size
    return random.Random(int.from_bytes(digest, "big"))


def fresh_random() -> random.Random:
    """OS-entropy backed source for ordinary, non-reproducible draws."""
    return random.SystemRandom()


def partial_shuffle(items: Sequence[T], count: int, rng: RandomSource) -> List[T]:
    """Pick `count` distinct items with a partial Fisher-Yates pass.

    Only the first `count` slots of a copy are shuffled, so every ordered
    selection is equally likely and the input is left untouched.
    """
    if count < 0 or count > len(items):
        raise ValueError(f"Cannot pick {count} items from a pool of {len(items)}")

    pool = list(items)
    n = len(pool)
    for i in range(count):
        j = i + rng.randrange(n - i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:count]
