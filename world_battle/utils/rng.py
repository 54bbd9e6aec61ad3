"""Seedable RNG wrapper for dice rolls and shuffles."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for game randomness.

    All randomness in the engine (dice, deck shuffles, territory deals)
    goes through this class so tests can pin it with a seed. Without a
    seed, the generator is seeded from system entropy.
    """

    def __init__(self, seed: int | None = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive.

        Args:
            a: Lower bound (inclusive)
            b: Upper bound (inclusive)

        Returns:
            Random integer between a and b
        """
        return self.rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        """Return random index in range [0, stop)."""
        return self.rng.randrange(stop)

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return self.rng.choice(seq)

    def shuffled(self, seq) -> list:
        """Return a Fisher-Yates shuffled copy of a sequence.

        The input is left untouched.

        Args:
            seq: Sequence to shuffle

        Returns:
            New list with the same elements in random order
        """
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
        return items

    def get_state(self):
        """Get the current state of the RNG for serialization.

        Returns:
            RNG state tuple that can be used with set_state
        """
        return self.rng.getstate()

    def set_state(self, state):
        """Set the state of the RNG for deserialization.

        Args:
            state: RNG state tuple from get_state
        """
        self.rng.setstate(state)
