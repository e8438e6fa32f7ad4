from __future__ import annotations

from pyracescan.ingestion.icecast import parse_active_mounts


def test_single_source_object() -> None:
    status = {"icestats": {"source": {"listenurl": "http://racescan.racing:8000/lmsc-28-landon-s-huffman.mp3"}}}

    active = parse_active_mounts(status)

    assert active.mounts == frozenset({"/lmsc-28-landon-s-huffman.mp3"})
    assert active.status_known is True


def test_source_list_and_listen_url_alias() -> None:
    status = {
        "icestats": {
            "source": [
                {"listenurl": "https://racescan.racing/icecast/smt-62-keelen-harvick.mp3"},
                {"listen_url": "http://localhost:8000/smt-00-chase-burrow.mp3"},
                {"listenurl": "http://localhost:8000/admin-feed.ogg"},
                "garbage",
            ]
        }
    }

    active = parse_active_mounts(status)

    assert active.sorted_mounts() == ["/icecast/smt-62-keelen-harvick.mp3", "/smt-00-chase-burrow.mp3"]


def test_malformed_listen_url_uses_regex_tail() -> None:
    status = {"icestats": {"source": {"listenurl": "racescan:8000/lmsc-28-x.mp3"}}}

    assert parse_active_mounts(status).mounts == frozenset({"/lmsc-28-x.mp3"})


def test_no_sources_is_known_but_empty() -> None:
    active = parse_active_mounts({"icestats": {"admin": "x"}})

    assert active.is_empty
    assert active.status_known is True


def test_unusable_payload_is_unknown() -> None:
    for payload in (None, [], "x", {"other": 1}):
        active = parse_active_mounts(payload)
        assert active.is_empty
        assert active.status_known is False
