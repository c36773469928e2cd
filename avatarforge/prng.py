"""Identity hashing and the seeded pseudo-random sequence.

Every random decision in the engine is drawn from a SeededSequence that is
created per render call and passed explicitly to whoever needs it.
"""

import numpy as np

HASH_START = 5381

# Offset added to the identity seed for the backdrop sequence, so background
# dressing and character elements vary independently.
BACKDROP_SEED_OFFSET = 7919


def _to_int32(n):
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _code_units(text):
    """Yield the UTF-16 code units of text."""
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_identity(text):
    """Collapse a string into a non-negative 32-bit integer.

    djb2-xor over UTF-16 code units with 32-bit signed wrap-around:
    hash = ((hash << 5) + hash) ^ code, starting from 5381, then abs().
    """
    h = HASH_START
    for code in _code_units(text or ""):
        h = _to_int32(_to_int32(h << 5) + h) ^ code
    return abs(h)


class SeededSequence:
    """Deterministic linear-congruential sequence of floats in [0, 1).

    The Nth draw for a given seed is always the same. Re-create the
    sequence with the same seed to restart it.
    """

    MULTIPLIER = 1103515245
    INCREMENT = 12345
    MODULUS = 2 ** 31

    def __init__(self, seed):
        self.seed = int(seed)
        self._state = self.seed % self.MODULUS

    def random(self):
        """Advance the state and return it normalized to [0, 1)."""
        self._state = (self._state * self.MULTIPLIER
                       + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS

    def uniform(self, lo, hi):
        return lo + (hi - lo) * self.random()

    def randint(self, n):
        """Integer in [0, n). Always consumes one draw; returns 0 for n <= 0."""
        value = self.random()
        if n <= 0:
            return 0
        return min(n - 1, int(value * n))

    def sample(self, shape):
        """Draw enough values to fill a numpy array of the given shape."""
        count = int(np.prod(shape))
        values = np.fromiter((self.random() for _ in range(count)),
                             dtype=np.float64, count=count)
        return values.reshape(shape)

    def __iter__(self):
        return self

    def __next__(self):
        return self.random()

    def __repr__(self):
        return f"SeededSequence(seed={self.seed})"
