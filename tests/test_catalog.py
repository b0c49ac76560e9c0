"""
Tests for the song catalog and tabular catalog import.
"""

import tempfile
import shutil
from pathlib import Path
import pandas as pd
import pytest

from songgraph.catalog.importer import import_catalog, import_dataframe, row_to_song
from songgraph.catalog.song import Song
from songgraph.catalog.song_catalog import SongCatalog
from songgraph.errors import CatalogImportError


class TestSongCatalog:
    """Tests for SongCatalog."""

    def setup_method(self):
        self.catalog = SongCatalog()
        self.song = Song("1", "Bohemian Rhapsody", "Queen", "Rock", 1975, 354)

    def test_catalog_initialization(self):
        assert len(self.catalog) == 0
        assert self.catalog.all() == []

    def test_save_and_find(self):
        self.catalog.save(self.song)

        assert self.catalog.find("1") == self.song
        assert "1" in self.catalog
        assert self.catalog.find("2") is None
        assert self.catalog.find(None) is None

    def test_save_replaces(self):
        self.catalog.save(self.song)
        self.catalog.save(Song("1", "Renamed", "Queen", "Rock", 1975))

        assert len(self.catalog) == 1
        assert self.catalog.find("1").title == "Renamed"

    def test_delete(self):
        self.catalog.save(self.song)

        assert self.catalog.delete("1")
        assert not self.catalog.delete("1")
        assert len(self.catalog) == 0

    def test_preserves_insertion_order(self):
        songs = [Song(str(i), f"t{i}", "a", "g", 2000) for i in (3, 1, 2)]
        catalog = SongCatalog(songs)

        assert catalog.ids() == ["3", "1", "2"]
        assert list(catalog) == songs


class TestSong:
    """Tests for the Song record."""

    def test_formatted_duration(self):
        assert Song("1", "t", "a", "g", 1975, 354).formatted_duration() == "5:54"
        assert Song("1", "t", "a", "g", 1975).formatted_duration() == "0:00"

    def test_to_dict(self):
        song = Song("1", "t", "a", "g", 1975, 60)
        assert song.to_dict() == {
            "id": "1", "title": "t", "artist": "a", "genre": "g",
            "year": 1975, "duration_seconds": 60,
        }


class TestImportDataframe:
    """Row-level import behaviour."""

    def setup_method(self):
        self.catalog = SongCatalog()

    def test_counts_duplicates_and_invalid_rows(self):
        df = pd.DataFrame({
            "id": ["1", "1", "2", ""],
            "title": ["Bohemian Rhapsody", "Dup", "Bad Year", "No Id"],
            "artist": ["Queen", "Queen", "Queen", "Adele"],
            "genre": ["Rock", "Rock", "Rock", "Pop"],
            "year": ["1975", "1975", "abc", "2011"],
        })

        report = import_dataframe(df, self.catalog)

        assert report["imported"] == 2
        assert report["duplicates"] == 1
        assert report["invalid"] == 1
        assert len(self.catalog) == 2
        assert report["song_ids"][0] == "1"
        assert report["song_ids"][1] != ""

    def test_existing_catalog_ids_are_duplicates(self):
        self.catalog.save(Song("1", "Existing", "Queen", "Rock", 1975))
        df = pd.DataFrame([{"id": "1", "title": "t", "artist": "a", "genre": "g", "year": "2000"}])

        report = import_dataframe(df, self.catalog)

        assert report["duplicates"] == 1
        assert self.catalog.find("1").title == "Existing"

    def test_missing_columns(self):
        df = pd.DataFrame([{"title": "t", "artist": "a"}])

        with pytest.raises(CatalogImportError):
            import_dataframe(df, self.catalog)

    def test_on_import_callback(self):
        seen = []
        df = pd.DataFrame([
            {"id": "1", "title": "t1", "artist": "a", "genre": "g", "year": "2000"},
            {"id": "2", "title": "t2", "artist": "a", "genre": "g", "year": "2001"},
        ])

        import_dataframe(df, self.catalog, on_import=lambda song: seen.append(song.id))

        assert seen == ["1", "2"]

    def test_row_to_song_blank_fields(self):
        song = row_to_song({"id": "9", "title": "", "artist": " ", "genre": None,
                            "year": 1999.0, "duration": "200"})

        assert song.title == "Untitled"
        assert song.artist is None
        assert song.genre is None
        assert song.year == 1999
        assert song.duration_seconds == 200

    def test_row_to_song_requires_year(self):
        with pytest.raises(ValueError):
            row_to_song({"id": "9", "title": "t", "artist": "a", "genre": "g", "year": ""})


class TestImportCatalogFiles:
    """File-based import."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.catalog = SongCatalog()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_import_csv(self):
        path = Path(self.temp_dir) / "catalog.csv"
        path.write_text(
            "id,title,artist,genre,year,duration_seconds\n"
            "1,Bohemian Rhapsody,Queen,Rock,1975,354\n"
            "2,Thriller,Michael Jackson,Pop,1982,357\n"
            "3,Broken,Nobody,Pop,not-a-year,100\n",
            encoding="utf-8",
        )

        report = import_catalog(path, self.catalog)

        assert report["imported"] == 2
        assert report["invalid"] == 1
        song = self.catalog.find("1")
        assert song.year == 1975
        assert song.duration_seconds == 354
        assert song.artist == "Queen"

    def test_import_jsonl(self):
        path = Path(self.temp_dir) / "catalog.jsonl"
        path.write_text(
            '{"id": 7, "title": "Love Song", "artist": "Adele", "genre": "Pop", "year": 2015}\n'
            '{"id": 8, "title": "Hello", "artist": "Adele", "genre": "Pop", "year": 2015}\n',
            encoding="utf-8",
        )

        report = import_catalog(path, self.catalog)

        assert report["imported"] == 2
        assert self.catalog.find("7").title == "Love Song"

    def test_import_json_keeps_integer_ids(self):
        path = Path(self.temp_dir) / "catalog.json"
        path.write_text(
            '[{"id": 1, "title": "Bohemian Rhapsody", "artist": "Queen", "genre": "Rock", "year": 1975},'
            ' {"title": "Hello", "artist": "Adele", "genre": "Pop", "year": 2015},'
            ' {"id": 1, "title": "Again", "artist": "Queen", "genre": "Rock", "year": 1975}]',
            encoding="utf-8",
        )

        report = import_catalog(path, self.catalog)

        assert report["imported"] == 2
        assert report["duplicates"] == 1
        assert report["song_ids"][0] == "1"
        assert "1" in self.catalog
        assert self.catalog.find("1").year == 1975
        generated = report["song_ids"][1]
        assert generated and generated != "1"
        assert self.catalog.find(generated).title == "Hello"

    def test_import_parquet(self):
        path = Path(self.temp_dir) / "catalog.parquet"
        pd.DataFrame({
            "id": pd.array([10, None, 11, 10], dtype="Int64"),
            "title": ["Thriller", "Billie Jean", "Someone Like You", "Dup"],
            "artist": ["Michael Jackson", "Michael Jackson", "Adele", "Michael Jackson"],
            "genre": ["Pop", "Pop", "Pop", "Pop"],
            "year": [1982, 1982, 2011, 1982],
            "duration_seconds": [357, 294, 285, 1],
        }).to_parquet(path, index=False)

        report = import_catalog(path, self.catalog)

        assert report["imported"] == 3
        assert report["duplicates"] == 1
        assert report["invalid"] == 0
        assert report["song_ids"][0] == "10"
        assert report["song_ids"][2] == "11"
        assert self.catalog.find("10").duration_seconds == 357
        assert self.catalog.find("11").year == 2011
        assert self.catalog.find(report["song_ids"][1]).title == "Billie Jean"

    def test_row_to_song_integral_float_id(self):
        assert row_to_song({"id": 7.0, "title": "t", "artist": "a", "genre": "g", "year": 2000}).id == "7"
        assert row_to_song({"id": 7.5, "title": "t", "artist": "a", "genre": "g", "year": 2000}).id == "7.5"

    def test_unsupported_format(self):
        with pytest.raises(CatalogImportError):
            import_catalog(Path(self.temp_dir) / "catalog.txt", self.catalog)

    def test_missing_file(self):
        with pytest.raises(CatalogImportError):
            import_catalog(Path(self.temp_dir) / "missing.csv", self.catalog)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
