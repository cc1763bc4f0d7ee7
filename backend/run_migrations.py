"""Simple migration runner for SQLite using provided SQL files in migrations/"""
from pathlib import Path
import sqlite3

from teacher_registry.config import settings

BASE = Path(__file__).parent
MIGRATIONS = sorted((BASE / "migrations").glob("*.sql"))


def sqlite_path(url: str) -> str:
    """Return the file path of a `sqlite:///...` URL."""
    if not url.startswith("sqlite:///"):
        raise SystemExit(f"run_migrations only handles SQLite URLs, got {url.split(':', 1)[0]}")
    return url[len("sqlite:///"):]


def run():
    """Execute SQL migration files against the configured SQLite database.

    The function applies every `migrations/*.sql` file in lexical
    order. Server databases get their schema from
    `teacher_registry.database.create_db_and_tables` instead.
    """
    db_path = sqlite_path(settings.DATABASE_URL)
    print("Using database:", db_path)
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    for m in MIGRATIONS:
        print("Applying:", m.name)
        sql = m.read_text(encoding="utf-8")
        cur.executescript(sql)
    conn.commit()
    conn.close()
    print("Migrations applied.")


if __name__ == '__main__':
    run()
