import hashlib
import random

import pytest

from sha256_cli import (
    hexdigest,
    load_known_answers,
    main,
    self_test,
    sha256,
    to_hex,
)


@pytest.mark.parametrize("message,expected", load_known_answers())
def test_known_answers(message, expected):
    assert hexdigest(message) == expected


def test_empty_message():
    assert hexdigest(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_zero_character():
    assert hexdigest(b"0") == "5feceb66ffc86f38d952786c6d696c79c2dbc239dd4e91b46729d73a27fb57e9"


def test_brown_fox_matches_hashlib():
    message = b"The quick brown fox jumps over the lazy dog."
    assert sha256(message) == hashlib.sha256(message).digest()


def test_random_messages_match_hashlib():
    """Differential check against hashlib on random lengths and contents."""
    rng = random.Random(0x5EED)
    for _ in range(120):
        message = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 600)))
        assert sha256(message) == hashlib.sha256(message).digest()


@pytest.mark.parametrize("length", [55, 56, 57, 63, 64, 65, 119, 120, 1000])
def test_padding_edge_lengths_match_hashlib(length):
    message = bytes((7 * i) & 0xFF for i in range(length))
    assert sha256(message) == hashlib.sha256(message).digest()


def test_deterministic_and_fixed_size():
    message = b"test message"
    assert sha256(message) == sha256(message)
    assert len(sha256(message)) == 32
    assert len(sha256(b"x" * 300)) == 32


def test_accepts_bytearray_and_memoryview():
    expected = hashlib.sha256(b"abc").digest()
    assert sha256(bytearray(b"abc")) == expected
    assert sha256(memoryview(b"abc")) == expected


def test_single_bit_flip_changes_digest():
    message = bytes(range(16))
    original = sha256(message)
    for bit in range(len(message) * 8):
        flipped = bytearray(message)
        flipped[bit // 8] ^= 0x80 >> (bit % 8)
        assert sha256(bytes(flipped)) != original


def test_to_hex():
    assert to_hex(b"") == ""
    assert to_hex(b"\x00\xff\x10\xab") == "00ff10ab"
    assert to_hex(sha256(b"")) == hashlib.sha256(b"").hexdigest()


def test_load_known_answers_from_custom_file(tmp_path):
    expected = hashlib.sha256(b"\x00\xff").hexdigest()
    path = tmp_path / "vectors.yaml"
    path.write_text(
        "vectors:\n"
        "  - message_hex: \"00ff\"\n"
        f"    digest: \"{expected.upper()}\"\n"
    )
    # Digests are normalised to lowercase.
    assert load_known_answers(str(path)) == [(b"\x00\xff", expected)]


@pytest.mark.parametrize(
    "content",
    [
        "just a string\n",
        "vectors: 3\n",
        "vectors:\n  - message: abc\n",
        "vectors:\n  - digest: \"00\"\n",
        "vectors:\n  - message: abc\n    digest: \"abcd\"\n",
    ],
)
def test_load_known_answers_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "vectors.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_known_answers(str(path))


def test_self_test_passes():
    assert self_test() == []


def test_cli_hashes_string(capsys):
    assert main(["abc"]) == 0
    out = capsys.readouterr().out
    assert out.strip() == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_cli_hashes_empty_string(capsys):
    assert main([""]) == 0
    assert capsys.readouterr().out.strip() == hashlib.sha256(b"").hexdigest()


def test_cli_hashes_file(tmp_path, capsys):
    data = bytes(range(256)) * 3
    path = tmp_path / "data.bin"
    path.write_bytes(data)

    assert main(["-f", str(path)]) == 0
    assert capsys.readouterr().out.strip() == hashlib.sha256(data).hexdigest()


def test_cli_missing_file(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "missing.bin")]) == 1
    assert "Error reading file" in capsys.readouterr().err


def test_cli_requires_an_argument(capsys):
    assert main([]) == 1


def test_cli_self_test(capsys):
    assert main(["--self-test"]) == 0
    assert "All known answers passed" in capsys.readouterr().out


def test_cli_self_test_reports_mismatch(tmp_path, capsys):
    path = tmp_path / "vectors.yaml"
    path.write_text("vectors:\n  - message: abc\n    digest: \"" + "0" * 64 + "\"\n")

    assert main(["--self-test", "--vectors", str(path)]) == 1
    assert "MISMATCH" in capsys.readouterr().err


def test_cli_self_test_bad_vectors_file(tmp_path, capsys):
    assert main(["--self-test", "--vectors", str(tmp_path / "nope.yaml")]) == 1
    assert "Error loading vectors" in capsys.readouterr().err


def test_cli_message_starting_with_dash_needs_separator(capsys):
    assert main(["-abc"]) == 1
    capsys.readouterr()

    assert main(["--", "-abc"]) == 0
    assert capsys.readouterr().out.strip() == hashlib.sha256(b"-abc").hexdigest()


@pytest.mark.parametrize("extra", [["abc"], ["-f", "data.bin"]])
def test_cli_vectors_requires_self_test(extra, capsys):
    assert main(extra + ["--vectors", "vectors.yaml"]) == 1
    assert "--vectors can only be used with --self-test" in capsys.readouterr().err
