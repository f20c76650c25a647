"""
Alea pseudo-random number generator.

Based on Johannes Baagøe's Alea algorithm. A single instance is created per
world generation session and threaded through every stage, so the same seed
always reproduces the same world regardless of platform or Python version.
"""


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Seedable generator producing floats in ``[0, 1)``.

    Instances are not thread safe and must never be shared between two
    concurrent generation sessions.
    """

    def __init__(self, seed):
        """Initialize with an integer or string seed."""
        self.seed = seed
        self.call_count = 0

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randint(self, lower: int, upper: int) -> int:
        """Random integer in ``[lower, upper]`` inclusive."""
        if upper < lower:
            raise ValueError(f"Empty range [{lower}, {upper}]")
        return lower + int(self.random() * (upper - lower + 1))

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        if probability >= 1:
            return True
        if probability <= 0:
            return False
        return self.random() < probability

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def slop(self, value: int, max_slop: int) -> int:
        """Shift ``value`` by a random integer in ``[-max_slop, max_slop]``."""
        return value + self.randint(-max_slop, max_slop)
