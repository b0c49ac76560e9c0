from __future__ import annotations


class SongGraphError(Exception):
    """Base exception for the recommendation engine."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class NoTrackAvailable(SongGraphError):
    """Raised by a playback session when its catalog snapshot is empty."""


class CatalogImportError(SongGraphError):
    """Raised when a catalog file cannot be read at all."""


class ConfigError(SongGraphError):
    """Raised for malformed configuration."""
