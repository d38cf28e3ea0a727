import pytest


class ScriptedRandom:
    """Random source that replays fixed values; fails loudly when it runs out."""

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self):
        if not self.floats:
            raise AssertionError("random() called more often than scripted")
        return self.floats.pop(0)

    def randrange(self, start, stop=None):
        if stop is None:
            start, stop = 0, start
        if not self.ints:
            raise AssertionError("randrange() called more often than scripted")
        value = self.ints.pop(0)
        assert start <= value < stop, f"scripted {value} outside [{start}, {stop})"
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


def bits_to_floats(bits):
    """random() draws that make Chromosome.random produce exactly `bits`."""
    return [0.1 if b else 0.9 for b in bits]


@pytest.fixture
def floats_for_bits():
    return bits_to_floats


def parse_bits(s):
    """Bits from a "0101..." string; whitespace and underscores are ignored."""
    bits = []
    for ch in s:
        if ch == "1":
            bits.append(True)
        elif ch == "0":
            bits.append(False)
        elif ch.isspace() or ch == "_":
            continue
        else:
            raise ValueError(f"Invalid bit character {ch!r}")
    return tuple(bits)


@pytest.fixture
def bits_from():
    return parse_bits
