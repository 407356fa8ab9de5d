# db.py
import json
import sqlite3
from pathlib import Path


def get_db(db_path: Path):
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path):
    conn = get_db(db_path)
    cur = conn.cursor()

    # Key/value table backing the cloud store
    cur.execute("""
    CREATE TABLE IF NOT EXISTS kv (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """)

    conn.commit()
    conn.close()


def kv_get(db_path: Path, key: str, default=None):
    conn = get_db(db_path)
    cur = conn.cursor()
    cur.execute("SELECT value FROM kv WHERE key = ?", (key,))
    row = cur.fetchone()
    conn.close()
    if row is None:
        return default
    return json.loads(row["value"])


def kv_set(db_path: Path, key: str, value, updated_at: str):
    conn = get_db(db_path)
    cur = conn.cursor()
    cur.execute("""
    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
    """, (key, json.dumps(value, ensure_ascii=False), updated_at))
    conn.commit()
    conn.close()


def kv_delete(db_path: Path, key: str):
    conn = get_db(db_path)
    cur = conn.cursor()
    cur.execute("DELETE FROM kv WHERE key = ?", (key,))
    conn.commit()
    conn.close()
