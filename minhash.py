"""MinHash - оценка Jaccard similarity без хранения самих множеств."""

import numpy as np
from typing import Callable, Iterable, Sequence, Tuple, Union

HashFunc = Callable[[bytes], Tuple[int, int]]

UINT64_MAX = (1 << 64) - 1


class SignatureSizeMismatch(ValueError):
    """Сигнатуры разной длины нельзя сравнивать или объединять."""

    def __init__(self, left: int, right: int):
        super().__init__(f"signature sizes do not match: {left} != {right}")
        self.left = left
        self.right = right


def _check_size(size) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ValueError(f"size must be a positive integer, got {size!r}")
    if size <= 0:
        raise ValueError(f"size must be a positive integer, got {size}")
    return int(size)


class MinHash:
    """MinHash signature for set similarity estimation.

    Движок привязан к одной хеш-функции вида bytes -> (uint64, uint64).
    Из двух значений v1, v2 строится семейство h_i = v1 + i * v2 (mod 2^64),
    поэтому на каждый элемент хеш считается ровно один раз.
    """

    def __init__(self, hash_func: HashFunc, size: int):
        self.hash_func = hash_func
        self.sig = np.full(_check_size(size), UINT64_MAX, dtype=np.uint64)
        self._steps = np.arange(len(self.sig), dtype=np.uint64)

    @classmethod
    def from_signature(cls, hash_func: HashFunc,
                       existing: Union[Sequence[int], np.ndarray]) -> 'MinHash':
        """Новый MinHash с независимой копией готовой сигнатуры."""
        if isinstance(existing, np.ndarray):
            if existing.ndim != 1:
                raise ValueError(f"signature must be one-dimensional, got shape {existing.shape}")
            if not np.issubdtype(existing.dtype, np.integer):
                raise ValueError(f"signature must hold integers, got dtype {existing.dtype}")
            if existing.size and int(existing.min()) < 0:
                raise ValueError(f"signature value out of uint64 range: {int(existing.min())}")
            sig = existing.astype(np.uint64, copy=True)
        else:
            values = list(existing)
            for v in values:
                if isinstance(v, (bool, np.bool_)) or not isinstance(v, (int, np.integer)):
                    raise ValueError(f"signature value must be an integer, got {v!r}")
                if not 0 <= int(v) <= UINT64_MAX:
                    raise ValueError(f"signature value out of uint64 range: {v}")
            sig = np.array([int(v) for v in values], dtype=np.uint64)

        mh = cls(hash_func, _check_size(len(sig)))
        mh.sig = sig
        return mh

    @property
    def size(self) -> int:
        return len(self.sig)

    def __len__(self) -> int:
        return len(self.sig)

    def push(self, element: bytes) -> None:
        """Добавить элемент в множество O(size)."""
        if not isinstance(element, (bytes, bytearray, memoryview)):
            raise TypeError(f"element must be bytes-like, got {type(element).__name__}")
        v1, v2 = self.hash_func(bytes(element))
        if not (0 <= v1 <= UINT64_MAX and 0 <= v2 <= UINT64_MAX):
            raise ValueError(f"hash function returned values outside uint64: {v1}, {v2}")

        # uint64 в numpy переполняется молча - это и нужно
        hashed = self._steps * np.uint64(v2) + np.uint64(v1)
        np.minimum(self.sig, hashed, out=self.sig)

    def push_all(self, elements: Iterable[bytes]) -> None:
        for element in elements:
            self.push(element)

    def push_strings(self, items: Iterable[str]) -> None:
        """Строки кодируются в UTF-8 и добавляются по одной."""
        for item in items:
            self.push(item.encode("utf-8"))

    def merge(self, other: 'MinHash') -> None:
        """Объединение: поэлементный минимум сигнатур, other не меняется."""
        if len(self) != len(other):
            raise SignatureSizeMismatch(len(self), len(other))
        np.minimum(self.sig, other.sig, out=self.sig)

    def signature(self) -> np.ndarray:
        """Read-only снимок текущей сигнатуры, последующие push в нем не видны."""
        snapshot = self.sig.copy()
        snapshot.flags.writeable = False
        return snapshot

    def similarity(self, other: 'MinHash') -> float:
        """Оценка Jaccard similarity: доля совпавших слотов."""
        if len(self) != len(other):
            raise SignatureSizeMismatch(len(self), len(other))
        matches = np.count_nonzero(self.sig == other.sig)
        return float(matches) / len(self)

    def copy(self) -> 'MinHash':
        return type(self).from_signature(self.hash_func, self.sig)

    def __or__(self, other: 'MinHash') -> 'MinHash':
        """Сигнатура объединения множеств, оба операнда не меняются."""
        result = self.copy()
        result.merge(other)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MinHash):
            return NotImplemented
        return bool(np.array_equal(self.sig, other.sig))

    def __repr__(self) -> str:
        return f"MinHash(size={len(self)})"
