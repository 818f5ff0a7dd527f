"""
Tests for the SQLite settings store.
"""

from logomotion import settings
from logomotion.effects import EffectId


class TestSettings:

    def test_round_trip(self, tmp_path):
        db = str(tmp_path / "settings.db")
        settings.save_setting("output_folder", "/tmp/out", db_path=db)
        assert settings.get_setting("output_folder", db_path=db) == "/tmp/out"

    def test_overwrite(self, tmp_path):
        db = str(tmp_path / "settings.db")
        settings.save_setting("last_effect", "star_glint", db_path=db)
        settings.save_setting("last_effect", "ellipse_grid", db_path=db)
        assert settings.get_setting("last_effect", db_path=db) == "ellipse_grid"

    def test_missing_key_default(self, tmp_path):
        db = str(tmp_path / "settings.db")
        assert settings.get_setting("nope", db_path=db) == ""
        assert settings.get_setting("nope", "x", db_path=db) == "x"

    def test_folder_is_created(self, tmp_path):
        db = str(tmp_path / "nested" / "dir" / "settings.db")
        settings.save_setting("k", 1, db_path=db)
        assert settings.get_setting("k", db_path=db) == "1"


class TestEffectParams:

    def test_round_trip_with_enum_key(self, tmp_path):
        db = str(tmp_path / "settings.db")
        params = {"density": 42, "color": "#ff0000"}
        settings.save_effect_params(EffectId.LINE_HALFTONE, params, db_path=db)
        assert settings.load_effect_params("line_halftone", db_path=db) == params
        assert settings.load_effect_params(EffectId.LINE_HALFTONE, db_path=db) == params

    def test_missing_is_empty(self, tmp_path):
        db = str(tmp_path / "settings.db")
        assert settings.load_effect_params(EffectId.STAR_GLINT, db_path=db) == {}

    def test_unreadable_is_empty(self, tmp_path):
        db = str(tmp_path / "settings.db")
        conn = settings.get_connection(db)
        conn.execute("INSERT INTO effect_params (effect_id, params) VALUES (?, ?)",
                     ("star_glint", "{not json"))
        conn.commit()
        conn.close()
        assert settings.load_effect_params(EffectId.STAR_GLINT, db_path=db) == {}
