"""
SQL-file migrations for the posts and post meta tables.

Each `NNNN_name.sql` file under the migrations directory is applied once, in
filename order, and recorded in the `_migrations` table. Only the part of a
file above its `-- Down` marker is executed.
"""

import logging
import os
import sqlite3

logger = logging.getLogger(__name__)

DOWN_MARKER = "-- Down"


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str):
        self.db_path = db_path
        self.migrations_dir = migrations_dir

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        return conn

    def _migration_files(self) -> list[str]:
        return sorted(f for f in os.listdir(self.migrations_dir) if f.endswith(".sql"))

    def _recorded(self, conn: sqlite3.Connection) -> set[str]:
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    def pending(self) -> list[str]:
        """Migration files not yet recorded, in the order they would run."""
        conn = self._connect()
        try:
            recorded = self._recorded(conn)
        finally:
            conn.close()
        return [f for f in self._migration_files() if f not in recorded]

    def run_migrations(self) -> list[str]:
        """Apply pending migrations; returns the filenames applied this run."""
        conn = self._connect()
        try:
            recorded = self._recorded(conn)
            to_apply = [f for f in self._migration_files() if f not in recorded]

            for filename in to_apply:
                logger.info("Applying migration %s to %s", filename, self.db_path)
                self._apply(conn, filename)

            if not to_apply:
                logger.info("Database %s is up to date", self.db_path)
            return to_apply
        finally:
            conn.close()

    def _up_script(self, filename: str) -> str:
        with open(os.path.join(self.migrations_dir, filename)) as f:
            content = f.read()
        return content.split(DOWN_MARKER, 1)[0]

    def _apply(self, conn: sqlite3.Connection, filename: str) -> None:
        try:
            conn.executescript(self._up_script(filename))
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
