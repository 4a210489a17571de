"""Эксперименты: точность оценки MinHash в зависимости от размера сигнатуры."""

import numpy as np
import matplotlib.pyplot as plt
from typing import List, Set, Tuple
from scipy import stats
from tqdm import tqdm
from minhash import MinHash
from hashers import HasherConfig


def generate_sets(size: int, overlap: int, seed: int = None) -> Tuple[Set[str], Set[str]]:
    # a: item_0 ... item_{size-1}
    # b: сдвинуто так, что общих ровно overlap элементов
    salt = np.random.randint(0, 10**6) if seed is None else seed
    a = {f"item_{salt}_{i}" for i in range(size)}
    b = {f"item_{salt}_{i}" for i in range(size - overlap, 2 * size - overlap)}
    return a, b


def exact_jaccard(a: Set[str], b: Set[str]) -> float:
    union = a | b
    if not union:
        return 1.0
    return len(a & b) / len(union)


def estimate(a: Set[str], b: Set[str], size: int, config: HasherConfig) -> float:
    hash_func = config.build()
    mh1, mh2 = MinHash(hash_func, size), MinHash(hash_func, size)
    mh1.push_strings(a)
    mh2.push_strings(b)
    return mh1.similarity(mh2)


def standard_error(j: float, size: int) -> float:
    """Теоретическая ошибка оценки: sqrt(J(1-J)/k)."""
    return float(np.sqrt(j * (1 - j) / size))


def measure_error(sizes: List[int], overlaps: List[int], n: int = 100,
                  trials: int = 10, hasher: str = "xxh3_128") -> np.ndarray:
    """Средняя абсолютная ошибка для каждой пары (size, overlap)."""
    results = np.zeros((len(sizes), len(overlaps)))

    for i, size in enumerate(tqdm(sizes, desc="sizes")):
        for j, overlap in enumerate(overlaps):
            errors = []
            for t in range(trials):
                # разные seed меняют и множества, и хеш-функцию
                a, b = generate_sets(n, overlap, seed=t)
                config = HasherConfig(name=hasher, seed=t + 1)
                errors.append(abs(estimate(a, b, size, config) - exact_jaccard(a, b)))
            results[i, j] = np.mean(errors)

    return results


def bias_test(size: int = 128, n: int = 100, overlap: int = 50,
              trials: int = 30, hasher: str = "xxh3_128"):
    """t-тест: среднее оценок не отличается от точного Jaccard."""
    a, b = generate_sets(n, overlap, seed=0)
    real = exact_jaccard(a, b)
    estimates = [estimate(a, b, size, HasherConfig(name=hasher, seed=t + 1))
                 for t in range(trials)]
    t_stat, p_value = stats.ttest_1samp(estimates, real)
    return real, float(np.mean(estimates)), float(t_stat), float(p_value)


def plot_error_curves(results: np.ndarray, sizes: List[int], overlaps: List[int],
                      n: int = 100, path: str = "minhash_error.png"):
    fig, ax = plt.subplots(figsize=(10, 6))

    for j, overlap in enumerate(overlaps):
        line, = ax.plot(sizes, results[:, j], 'o-', label=f'overlap={overlap}')
        real = overlap / (2 * n - overlap)
        # E|X - J| для нормального приближения = sigma * sqrt(2/pi)
        theory = [standard_error(real, s) * np.sqrt(2 / np.pi) for s in sizes]
        ax.plot(sizes, theory, '--', color=line.get_color(), alpha=0.5)

    ax.set_xlabel("size (длина сигнатуры)")
    ax.set_ylabel("Средняя |ошибка|")
    ax.set_title("MinHash: ошибка vs размер сигнатуры (пунктир - теория)")
    ax.set_xscale('log', base=2)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(path, dpi=300)
    plt.close(fig)


if __name__ == "__main__":
    sizes = [16, 32, 64, 128, 256]
    overlaps = [10, 50, 90]

    print("Running error analysis...")
    errors = measure_error(sizes, overlaps, n=100, trials=10)
    for size, row in zip(sizes, errors):
        print(f"size={size:4d} | " + " | ".join(f"{e:.4f}" for e in row))
    plot_error_curves(errors, sizes, overlaps, n=100)

    print("\nRunning bias t-test...")
    real, mean, t_stat, p_value = bias_test()
    print(f"J={real:.4f}, mean estimate={mean:.4f}, t={t_stat:.3f}, p={p_value:.4f}")
    print("Сохранено: minhash_error.png")
