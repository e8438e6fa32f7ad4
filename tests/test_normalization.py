from __future__ import annotations

import pytest

from pyracescan.ingestion.normalize import (
    derive_mounts,
    normalize_class_list,
    normalize_mount_base,
    slugify,
    strip_query_and_ext,
)


def test_slugify_basic_values() -> None:
    assert slugify("LMSC") == "lmsc"
    assert slugify("Landon S. Huffman") == "landon-s-huffman"
    assert slugify("  --Chase  Burrow!! ") == "chase-burrow"


def test_slugify_empty_uses_fallback() -> None:
    assert slugify("", "driver") == "driver"
    assert slugify(None, "na") == "na"
    assert slugify("!!!") == ""


@pytest.mark.parametrize("value", ["LMSC", "Landon S. Huffman", "00", "Keelen_Harvick #62"])
def test_slugify_is_idempotent(value: str) -> None:
    once = slugify(value)
    assert slugify(once) == once


def test_slugify_distinguishes_fallback_roster() -> None:
    names = ["Keelen Harvick", "Chase Burrow", "Landon S. Huffman"]
    assert len({slugify(n) for n in names}) == len(names)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("lmsc", ["LMSC"]),
        ("SMT, LMSC", ["SMT", "LMSC"]),
        ("smt/plm|lmsc;x", ["SMT", "PLM", "LMSC", "X"]),
        ("[SMT, PLM]", ["SMT", "PLM"]),
        (["smt", "", "plm"], ["SMT", "PLM"]),
        ("", []),
        (None, []),
    ],
)
def test_normalize_class_list(raw: object, expected: list[str]) -> None:
    assert normalize_class_list(raw) == expected


def test_normalize_class_list_regex_fallback_when_only_delimiters() -> None:
    assert normalize_class_list(",,") == []
    assert normalize_class_list("[]") == []


def test_strip_query_and_ext() -> None:
    assert strip_query_and_ext("/a-b.mp3?ts=1") == "/a-b"
    assert strip_query_and_ext("/a-b.OGG") == "/a-b"
    assert strip_query_and_ext("/a-b.wav") == "/a-b.wav"


def test_normalize_mount_base_strips_icecast_prefix() -> None:
    assert normalize_mount_base("/icecast/lmsc-28-x.mp3") == "/lmsc-28-x"
    assert normalize_mount_base("lmsc-28-x.mp3") == "/lmsc-28-x"
    assert normalize_mount_base("") == ""


def test_derive_mounts_is_pure() -> None:
    first = derive_mounts("LMSC", "28", "Landon S. Huffman")
    second = derive_mounts("LMSC", "28", "Landon S. Huffman")

    assert first == second
    assert first == ("/lmsc-28-landon-s-huffman.mp3", "/icecast/lmsc-28-landon-s-huffman.mp3")


def test_derive_mounts_fallback_slugs() -> None:
    assert derive_mounts("", "", "") == ("/class-na-driver.mp3", "/icecast/class-na-driver.mp3")
    # Name falls back to the number.
    assert derive_mounts("SMT", "00", "")[0] == "/smt-00-00.mp3"
