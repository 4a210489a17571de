"""
Попарное сравнение текстовых файлов через MinHash.
    python compare.py a.txt b.txt c.txt
    python compare.py docs/*.txt --size 256 --shingle 3 --threshold 0.5
    python compare.py a.txt b.txt --hasher murmur3_128 --json out.json
"""

import argparse
import json
import re
import sys
from itertools import combinations
from pathlib import Path
from typing import Dict, List, Optional
from tqdm import tqdm
from minhash import MinHash
from hashers import HASHERS, HasherConfig

WORD_RE = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str, shingle: int = 1) -> List[str]:
    """Слова в нижнем регистре, склеенные в шинглы по shingle штук."""
    if shingle < 1:
        raise ValueError(f"shingle must be >= 1, got {shingle}")
    words = WORD_RE.findall(text.lower())
    if len(words) < shingle:
        # короткий текст целиком становится одним шинглом
        return [" ".join(words)] if words else []
    return [" ".join(words[i:i + shingle]) for i in range(len(words) - shingle + 1)]


def sign_text(text: str, size: int, config: HasherConfig, shingle: int = 1) -> MinHash:
    mh = MinHash(config.build(), size)
    mh.push_strings(tokenize(text, shingle))
    return mh


def compare(paths: List[Path], size: int = 128, config: Optional[HasherConfig] = None,
            shingle: int = 1, threshold: float = 0.0) -> Dict:
    config = config or HasherConfig()
    signatures = {}
    for path in tqdm(paths, desc="signing", disable=len(paths) < 10):
        text = path.read_text(encoding="utf-8", errors="replace")
        signatures[str(path)] = sign_text(text, size, config, shingle)

    pairs = []
    for a, b in combinations(signatures, 2):
        sim = signatures[a].similarity(signatures[b])
        if sim >= threshold:
            pairs.append({"a": a, "b": b, "similarity": sim})
    pairs.sort(key=lambda p: p["similarity"], reverse=True)

    return {
        "size": size,
        "hasher": config.name,
        "signatures": {k: [int(v) for v in mh.signature()] for k, mh in signatures.items()},
        "pairs": pairs,
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Estimate Jaccard similarity of text files with MinHash")
    p.add_argument("files", nargs="+", type=Path)
    p.add_argument("--size", type=int, default=128)
    p.add_argument("--hasher", choices=sorted(HASHERS), default="xxh3_128")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--shingle", type=int, default=1)
    p.add_argument("--threshold", type=float, default=0.0)
    p.add_argument("--json", type=Path, default=None)
    args = p.parse_args(argv)

    if args.size < 1:
        p.error("--size must be positive")
    if args.shingle < 1:
        p.error("--shingle must be positive")
    if len(args.files) < 2:
        p.error("need at least two files to compare")
    missing = [str(f) for f in args.files if not f.is_file()]
    if missing:
        p.error(f"not a file: {', '.join(missing)}")

    result = compare(args.files, size=args.size,
                     config=HasherConfig(name=args.hasher, seed=args.seed),
                     shingle=args.shingle, threshold=args.threshold)

    for pair in result["pairs"]:
        print(f"{pair['similarity']:.4f}  {pair['a']}  {pair['b']}")

    if args.json is not None:
        with open(args.json, "w") as f:
            json.dump(result, f, indent=2)
        print(f"\n✓ Saved: {args.json}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
