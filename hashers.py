"""Хеш-функции с двумя 64-битными выходами для MinHash."""

from dataclasses import dataclass
from functools import partial
from typing import Tuple

import mmh3
import xxhash

from minhash import HashFunc

MASK64 = (1 << 64) - 1


def xxh3_128(data: bytes, seed: int = 0) -> Tuple[int, int]:
    """Один 128-битный XXH3, разрезанный на (low64, high64)."""
    h = xxhash.xxh3_128_intdigest(data, seed=seed)
    return h & MASK64, h >> 64


def murmur3_128(data: bytes, seed: int = 0) -> Tuple[int, int]:
    """MurmurHash3 x64_128 как пара (h1, h2)."""
    h1, h2 = mmh3.hash64(data, seed=seed & 0xFFFFFFFF, signed=False)
    return h1, h2


def xxh3_murmur3(data: bytes, seed: int = 0) -> Tuple[int, int]:
    """Две разные 64-битные функции: XXH3-64 и первая половина MurmurHash3."""
    h1, _ = mmh3.hash64(data, seed=seed & 0xFFFFFFFF, signed=False)
    return xxhash.xxh3_64_intdigest(data, seed=seed), h1


HASHERS = {
    "xxh3_128": xxh3_128,
    "murmur3_128": murmur3_128,
    "xxh3_murmur3": xxh3_murmur3,
}


@dataclass
class HasherConfig:
    name: str = "xxh3_128"
    seed: int = 0  # mmh3 берет только младшие 32 бита

    def build(self) -> HashFunc:
        return get_hasher(self.name, self.seed)


def get_hasher(name: str, seed: int = 0) -> HashFunc:
    if name not in HASHERS:
        known = ", ".join(sorted(HASHERS))
        raise ValueError(f"Unknown hasher {name!r}, expected one of: {known}")
    func = HASHERS[name]
    if seed == 0:
        return func
    return partial(func, seed=seed)
