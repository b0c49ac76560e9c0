"""
Catalog module for SongGraph.

This module provides the song record, the in-memory catalog the engine reads
from, and tabular catalog import.
"""

from .song import Song
from .song_catalog import SongCatalog
from .importer import import_catalog, import_dataframe

__all__ = ["Song", "SongCatalog", "import_catalog", "import_dataframe"]
