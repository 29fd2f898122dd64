"""Differential check of `sha256_cli.sha256` against `hashlib.sha256`.

Random messages of random length are hashed by both implementations and any
disagreement is recorded. Lengths around the 55/56/64-byte padding edges are
always included.

Usage:
    python crosscheck.py                        # 100 messages, up to 1024 bytes
    python crosscheck.py --count 1000 --seed 7
    python crosscheck.py --output data/crosscheck.yaml
"""

from __future__ import annotations

import argparse
import hashlib
import os
import random
import sys
from typing import Dict, Generator, List, Optional

import yaml

from sha256_cli import hexdigest


# Message lengths where the padding changes shape.
EDGE_LENGTHS = (0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 127, 128)


def random_messages(
    count: int, max_length: int, rng: random.Random
) -> Generator[bytes, None, None]:
    """Yield the padding edge cases followed by `count` random messages."""
    for length in EDGE_LENGTHS:
        if length <= max_length:
            yield bytes(rng.getrandbits(8) for _ in range(length))

    for _ in range(count):
        length = rng.randint(0, max_length)
        yield bytes(rng.getrandbits(8) for _ in range(length))


def run_crosscheck(count: int = 100, max_length: int = 1024, seed: Optional[int] = None) -> Dict:
    """Compare both implementations and return a report dictionary."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if max_length < 0:
        raise ValueError(f"max_length must be non-negative, got {max_length}")

    if seed is None:
        seed = random.SystemRandom().randrange(2**32)
    rng = random.Random(seed)

    checked = 0
    mismatches: List[Dict[str, str]] = []
    for message in random_messages(count, max_length, rng):
        expected = hashlib.sha256(message).hexdigest()
        actual = hexdigest(message)
        checked += 1
        if actual != expected:
            mismatches.append(
                {
                    "message_hex": message.hex(),
                    "expected": expected,
                    "actual": actual,
                }
            )

    return {
        "seed": seed,
        "count": count,
        "max_length": max_length,
        "checked": checked,
        "mismatches": mismatches,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare this SHA-256 implementation against hashlib on random input"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=100,
        help="Number of random messages (default: 100)",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=1024,
        help="Maximum message length in bytes (default: 1024)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the message generator (default: random)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the report to this YAML file",
    )
    args = parser.parse_args(argv)

    if args.count < 0 or args.max_length < 0:
        print("ERROR: --count and --max-length must be non-negative")
        return 1

    report = run_crosscheck(args.count, args.max_length, args.seed)

    print(f"Seed: {report['seed']}")
    print(f"Checked {report['checked']:,} messages (max length {report['max_length']:,} bytes)")

    if args.output:
        directory = os.path.dirname(args.output)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(args.output, "w") as f:
            yaml.dump(report, f, default_flow_style=False, sort_keys=False)
        print(f"Report written to {args.output}")

    if report["mismatches"]:
        for entry in report["mismatches"][:5]:
            print(f"  MISMATCH {entry['message_hex'][:32]}...: expected {entry['expected']}, got {entry['actual']}")
        print(f"✗ {len(report['mismatches'])} mismatches")
        return 1

    print("✓ All digests match hashlib")
    return 0


if __name__ == "__main__":
    sys.exit(main())
