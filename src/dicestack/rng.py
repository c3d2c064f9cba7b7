"""
Sources of randomness for dice.

Every die group draws from a source object exposing between(min, max). The
default source wraps random.Random; tests hand in a SequenceSource so they can
predict every draw.
"""
import random


class RandomSource(object):
    """
    Uniform integer draws over an inclusive range.
    """
    def __init__(self, seed=None):
        self.rng = random.Random(seed)

    def between(self, low, high):
        return self.rng.randint(low, high)


class SequenceSource(RandomSource):
    """
    Replays a fixed list of draws, ignoring the requested range.
    """
    def __init__(self, values=()):
        super(SequenceSource, self).__init__()
        self.values = list(values)
        self.draws = 0

    def extend(self, values):
        self.values.extend(values)

    def between(self, low, high):
        if not self.values:
            raise IndexError("SequenceSource exhausted after %d draws"
                             % self.draws)
        self.draws += 1
        return self.values.pop(0)


default_source = RandomSource()
