"""HA Music - artist catalog with YouTube lookup and Home Assistant playback."""

__version__ = "0.3.0"
