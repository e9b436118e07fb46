import random


class RandomByteSource:
    """Uniform random bytes for the Cxkk instruction.

    Anything with ``next_byte()`` and ``seed()`` can stand in for it,
    which is how tests get a predictable sequence.
    """

    def __init__(self, seed=None):
        self._random = random.Random(seed)

    def seed(self, value=None):
        self._random.seed(value)

    def next_byte(self):
        return self._random.getrandbits(8)
