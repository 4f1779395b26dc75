"""
PCG pseudorandom number generator.

Adapted from the PCG family (http://www.pcg-random.org/): a 64-bit linear
congruential state advanced by a fixed multiplier and an odd increment, with
an xorshift-and-rotate output function. The whole generator is two 64-bit
words, so it can be saved, published and replayed exactly.

The externally visible seed is ``(state, sequence)`` where the increment is
``sequence * 2 + 1``; the forced low bit is never part of the seed.
"""

import hashlib
import os
import struct
from typing import NamedTuple, Optional

MASK64 = (1 << 64) - 1
MULTIPLIER = 6364136223846793005

_SEED_FORMAT = "<QQ"


class Seed(NamedTuple):
    """Serialized generator state: the LCG state and the stream selector."""

    state: int
    sequence: int

    def to_bytes(self) -> bytes:
        """16 bytes: both words, little-endian."""
        return struct.pack(_SEED_FORMAT, self.state, self.sequence)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Seed":
        if len(data) != struct.calcsize(_SEED_FORMAT):
            raise ValueError(f"A seed is 16 bytes, got {len(data)}")
        return cls(*struct.unpack(_SEED_FORMAT, data))

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, text: str) -> "Seed":
        return cls.from_bytes(bytes.fromhex(text))

    def sha256(self) -> str:
        """Lowercase hex SHA-256 of :meth:`to_bytes`."""
        return hashlib.sha256(self.to_bytes()).hexdigest()


class PcgRng:
    """
    Deterministic generator used for provably fair shuffles.

    >>> a = PcgRng(42, 54)
    >>> b = PcgRng.from_seed(a.to_seed())
    >>> a.next_u64() == b.next_u64()
    True
    """

    __slots__ = ("_state", "_inc")

    def __init__(self, seed: int, sequence: int = 0):
        self._state = 0
        self._inc = ((sequence << 1) | 1) & MASK64
        self.next_u64()
        self._state = (self._state + seed) & MASK64

    @classmethod
    def from_seed(cls, seed: Seed) -> "PcgRng":
        """Resume a generator exactly where :meth:`to_seed` captured it."""
        state, sequence = seed
        if not (0 <= state <= MASK64 and 0 <= sequence <= MASK64 >> 1):
            raise ValueError(f"Seed words out of range: {seed!r}")
        rng = cls.__new__(cls)
        rng._state = state
        rng._inc = (sequence << 1) | 1
        return rng

    @classmethod
    def from_entropy(cls, source: Optional[bytes] = None) -> "PcgRng":
        """Seed from 16 bytes of entropy, by default from ``os.urandom``."""
        data = source if source is not None else os.urandom(16)
        seed, sequence = struct.unpack(_SEED_FORMAT, data)
        return cls(seed, sequence >> 1)

    def to_seed(self) -> Seed:
        return Seed(self._state, self._inc >> 1)

    def seed_hash(self) -> str:
        return self.to_seed().sha256()

    def next_u64(self) -> int:
        self._state = (self._state * MULTIPLIER + self._inc) & MASK64
        state = self._state
        xor = (((state >> 18) ^ state) >> 27) & MASK64
        rot = state >> 59
        return ((xor >> rot) | (xor << ((-rot) & 31))) & MASK64

    def next_u32(self) -> int:
        return self.next_u64() & 0xFFFFFFFF

    def randrange(self, start: int, stop: Optional[int] = None) -> int:
        """
        Uniform integer in ``[start, stop)``, or ``[0, start)`` with one
        argument. Draws below the rejection threshold are discarded so every
        result is equally likely.
        """
        if stop is None:
            start, stop = 0, start
        bound = stop - start
        if bound <= 0:
            raise ValueError(f"Empty range for randrange({start}, {stop})")
        if bound > MASK64:
            raise ValueError("Range wider than 64 bits")
        threshold = (MASK64 + 1 - bound) % bound
        while True:
            r = self.next_u64()
            if r >= threshold:
                return start + r % bound

    def random(self) -> float:
        """Float in ``[0.0, 1.0)`` from the top 53 bits of a draw."""
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))

    def random_bytes(self, n: int) -> bytes:
        """``n`` bytes filled from successive little-endian 64-bit draws."""
        out = bytearray()
        while len(out) < n:
            out += struct.pack("<Q", self.next_u64())
        return bytes(out[:n])

    def __repr__(self) -> str:
        state, sequence = self.to_seed()
        return f"PcgRng.from_seed(Seed(state={state}, sequence={sequence}))"
