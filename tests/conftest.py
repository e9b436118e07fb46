import pytest

from chip8vm import Chip8


class ScriptedBytes:
    """Random source that hands out a fixed sequence of bytes, in a loop."""

    def __init__(self, values):
        self.values = list(values)
        self.position = 0
        self.seeded_with = []

    def seed(self, value=None):
        self.seeded_with.append(value)

    def next_byte(self):
        value = self.values[self.position % len(self.values)]
        self.position += 1
        return value


@pytest.fixture
def rng():
    return ScriptedBytes([0xAB, 0x5C, 0xFF])


@pytest.fixture
def chip(rng):
    chip = Chip8(rng=rng)
    chip.init()
    return chip
