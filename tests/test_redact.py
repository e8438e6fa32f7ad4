from __future__ import annotations

from pyracescan._redact import redact_for_log, redact_url


def test_redact_url_hides_session_id() -> None:
    url = "https://racescan.racing/api/stream?mount=%2Fx.mp3&sid=secret&ts=1"

    assert redact_url(url) == "https://racescan.racing/api/stream?mount=%2Fx.mp3&sid=<redacted>&ts=1"
    assert redact_url("https://a/x.mp3") == "https://a/x.mp3"


def test_redact_for_log_masks_sensitive_keys() -> None:
    payload = {"sessionId": "abc", "firstName": "Ada", "nested": [{"password": "pw"}]}

    assert redact_for_log(payload) == {
        "sessionId": "<redacted>",
        "firstName": "Ada",
        "nested": [{"password": "<redacted>"}],
    }


def test_redact_for_log_scrubs_urls_inside_payloads() -> None:
    payload = {"streams": ["https://a/api/stream?mount=%2Fx.mp3&sid=abc"], "count": 1}

    assert redact_for_log(payload) == {
        "streams": ["https://a/api/stream?mount=%2Fx.mp3&sid=<redacted>"],
        "count": 1,
    }
