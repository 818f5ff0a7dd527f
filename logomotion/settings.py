"""
Logo Motion - Settings Store
SQLite persistence for app settings and the last-used parameters per effect.
"""

import os
import json
import sqlite3
import logging
from datetime import datetime

from logomotion.config import SETTINGS_DB_PATH

logger = logging.getLogger(__name__)


def get_connection(db_path=None):
    """Get a database connection with row factory; creates the schema on first use."""
    db_path = db_path or SETTINGS_DB_PATH
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    _init_schema(conn)
    return conn


def _init_schema(conn):
    cursor = conn.cursor()
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT DEFAULT ''
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS effect_params (
            effect_id TEXT PRIMARY KEY,
            params TEXT NOT NULL,
            updated_at TEXT
        )
    """)
    conn.commit()


def save_setting(key, value, db_path=None):
    """Save a setting to the database."""
    conn = get_connection(db_path)
    try:
        conn.execute("""
            INSERT INTO settings (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """, (key, str(value)))
        conn.commit()
    finally:
        conn.close()


def get_setting(key, default="", db_path=None):
    """Get a setting from the database."""
    conn = get_connection(db_path)
    try:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    finally:
        conn.close()
    return row["value"] if row else default


def save_effect_params(effect_id, params, db_path=None):
    """Remember the parameter values last used with an effect."""
    key = getattr(effect_id, "value", effect_id)
    conn = get_connection(db_path)
    try:
        conn.execute("""
            INSERT INTO effect_params (effect_id, params, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(effect_id) DO UPDATE SET
                params = excluded.params, updated_at = excluded.updated_at
        """, (key, json.dumps(params), datetime.now().isoformat()))
        conn.commit()
    finally:
        conn.close()


def load_effect_params(effect_id, db_path=None):
    """
    Saved parameters for an effect, or {} when nothing usable is stored.

    Callers merge the result over the effect defaults.
    """
    key = getattr(effect_id, "value", effect_id)
    conn = get_connection(db_path)
    try:
        row = conn.execute(
            "SELECT params FROM effect_params WHERE effect_id = ?", (key,)
        ).fetchone()
    finally:
        conn.close()
    if not row:
        return {}
    try:
        params = json.loads(row["params"])
    except ValueError:
        logger.warning("Ignoring unreadable saved params for %s", key)
        return {}
    return params if isinstance(params, dict) else {}
