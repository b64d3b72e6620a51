from typing import Sequence, TypeVar

T = TypeVar("T")

# Linear congruential generator constants
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def hash_string(text: str) -> int:
    """
    Stable non-negative hash of a string.

    Polynomial rolling hash (h * 31 + unit) over the UTF-16 code units of
    the text, folded to a signed 32-bit integer after every step, then made
    non-negative. Unlike the built-in hash() this is identical across runs,
    processes and platforms.
    """
    h = 0
    units = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def next_seed(seed: int) -> int:
    """Advance the LCG by one step."""
    return (seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS


def seeded_int(seed: int, upper: int) -> int:
    """Bounded integer in [0, upper) derived from the next LCG state of seed."""
    return int(next_seed(seed) / LCG_MODULUS * upper)


def seeded_shuffle(items: Sequence[T], seed: int) -> list[T]:
    """
    Deterministic Fisher-Yates shuffle driven by the LCG.

    Returns a new list; the input sequence is left untouched.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        seed = next_seed(seed)
        j = int(seed / LCG_MODULUS * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


class SeededRandom:
    """Reproducible stream of pseudo-random numbers for mock data generation."""

    def __init__(self, seed: int):
        self.seed = seed

    def random(self) -> float:
        """Next float in [0, 1)."""
        self.seed = next_seed(self.seed)
        return self.seed / LCG_MODULUS

    def randint(self, upper: int) -> int:
        """Next integer in [0, upper)."""
        return int(self.random() * upper)
