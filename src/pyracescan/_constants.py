"""Internal constants shared across the library."""

from datetime import timedelta, timezone

BASE_URL = "https://racescan.racing"
STREAM_PROXY_PATH = "/api/stream"
STREAM_ORIGINS: tuple[str, ...] = (BASE_URL, "https://www.racescan.racing")
STREAM_EXTENSIONS: tuple[str, ...] = (".mp3",)
USER_AGENT = "pyracescan"

# ------------------------------------------------------------------
# Backend endpoints
# ------------------------------------------------------------------

DRIVERS_CSV_PATH = "/drivers/drivers.csv"
EVENTS_CSV_PATH = "/events/events.csv"
ICECAST_STATUS_PATH = "/icecast/status-json.xsl"
USER_INFO_PATH = "/api/user-info"
SESSION_PATH = "/api/session"
DAY_PASSES_PATH = "/api/user-day-passes"
SLIDESHOW_PATH = "/api/tracks"
LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"

# ------------------------------------------------------------------
# Mount conventions
# ------------------------------------------------------------------

ICECAST_PREFIX = "/icecast"
AUDIO_EXTENSIONS: tuple[str, ...] = ("mp3", "aac", "m4a", "ogg", "opus")

# Event feed times carry no zone; the schedule is published in US Eastern
# standard time and read at a fixed offset.
EASTERN_OFFSET = timezone(timedelta(hours=-5))

# When an event row names no class, the feed describes a PLM race followed by
# an LMSC race on the same card.
SPLIT_CLASSES: tuple[str, str] = ("PLM", "LMSC")
SPLIT_SECOND_RACE_DELAY = timedelta(hours=2)
KNOWN_TRACK_CLASSES: tuple[str, ...] = ("LMSC", "PLM", "SMT")
