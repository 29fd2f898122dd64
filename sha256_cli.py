"""SHA-256 built from `pad_message` and the compressor in `compress.py`.

This module provides:

- `sha256(data: bytes) -> bytes`: compute the SHA-256 digest of arbitrary data.
- `to_hex` / `hexdigest`: lowercase hex rendering for display and tests.
- CLI usage:
    python sha256_cli.py "message"        # hash the UTF-8 encoding of "message"
    python sha256_cli.py -f path/to/file  # hash the raw bytes of a file
    python sha256_cli.py --self-test      # check known_answers.yaml
    python sha256_cli.py -- "-message"    # messages starting with "-" go after --
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Tuple

import yaml

from compress import digest
from padding import pad_message


DEFAULT_VECTORS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "known_answers.yaml")


def sha256(data: bytes) -> bytes:
    """Compute the SHA-256 digest of `data`.

    Example:
        >>> sha256(b"abc").hex()
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    return digest(pad_message(bytes(data)))


def to_hex(data: bytes) -> str:
    """Lowercase hex, two characters per byte, no prefix or separators."""
    return bytes(data).hex()


def hexdigest(data: bytes) -> str:
    """Convenience helper to return the SHA-256 hex digest of `data`."""
    return to_hex(sha256(data))


def load_known_answers(path: Optional[str] = None) -> List[Tuple[bytes, str]]:
    """Load `(message, expected_hex_digest)` pairs from a YAML vectors file.

    Each entry must carry a `digest` and either `message` (UTF-8 text) or
    `message_hex` (raw bytes in hex).
    """
    if path is None:
        path = DEFAULT_VECTORS

    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if not isinstance(document, dict) or not isinstance(document.get("vectors"), list):
        raise ValueError(f"{path}: expected a top-level 'vectors' list")

    vectors: List[Tuple[bytes, str]] = []
    for idx, entry in enumerate(document["vectors"]):
        if not isinstance(entry, dict) or "digest" not in entry:
            raise ValueError(f"{path}: vector #{idx} has no 'digest'")

        if "message_hex" in entry:
            message = bytes.fromhex(str(entry["message_hex"]))
        elif "message" in entry:
            message = str(entry["message"]).encode("utf-8")
        else:
            raise ValueError(f"{path}: vector #{idx} needs 'message' or 'message_hex'")

        expected = str(entry["digest"]).lower()
        if len(expected) != 64:
            raise ValueError(
                f"{path}: vector #{idx} digest must be 64 hex characters, got {len(expected)}"
            )
        vectors.append((message, expected))

    return vectors


def self_test(path: Optional[str] = None) -> List[Tuple[bytes, str, str]]:
    """Hash every known answer and return the `(message, expected, actual)` mismatches."""
    failures = []
    for message, expected in load_known_answers(path):
        actual = hexdigest(message)
        if actual != expected:
            failures.append((message, expected, actual))
    return failures


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256_cli.py",
        description="Print the SHA-256 hex digest of a string or a file",
        epilog='A message that starts with "-" must follow "--", e.g. sha256_cli.py -- -abc',
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "message",
        nargs="?",
        help="Message to hash (its UTF-8 encoding is hashed)",
    )
    source.add_argument(
        "-f",
        "--file",
        dest="filename",
        help="Hash the raw bytes of this file instead",
    )
    source.add_argument(
        "--self-test",
        action="store_true",
        help="Check the implementation against the known-answer vectors",
    )
    parser.add_argument(
        "--vectors",
        default=None,
        help=f"Known-answer YAML file for --self-test (default: {DEFAULT_VECTORS})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        if args.vectors is not None and not args.self_test:
            parser.error("--vectors can only be used with --self-test")
    except SystemExit as e:
        # argparse has already printed usage or help.
        return 1 if e.code else 0

    if args.self_test:
        try:
            failures = self_test(args.vectors)
        except (OSError, ValueError, yaml.YAMLError) as e:
            sys.stderr.write(f"Error loading vectors: {e}\n")
            return 1
        for message, expected, actual in failures:
            sys.stderr.write(
                f"MISMATCH for {message[:50]!r}: expected {expected}, got {actual}\n"
            )
        if failures:
            return 1
        print("All known answers passed")
        return 0

    # File mode: `-f <filename>`
    if args.filename is not None:
        try:
            with open(args.filename, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.filename}': {e}\n")
            return 1
        print(hexdigest(data))
        return 0

    # Default: treat the argument as a UTF-8 string.
    print(hexdigest(args.message.encode("utf-8")))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
