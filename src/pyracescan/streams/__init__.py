"""Stream layer: mount resolution, candidate URLs and playback."""

__all__: list[str] = []
