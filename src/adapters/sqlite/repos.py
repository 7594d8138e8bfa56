import json
import sqlite3
from datetime import datetime
from typing import Any

from src.domain.entities import Post


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLitePostRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, post: Post) -> Post:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO posts (
                    id, type, slug, title, status, permalink, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    type=excluded.type,
                    slug=excluded.slug,
                    title=excluded.title,
                    status=excluded.status,
                    permalink=excluded.permalink,
                    updated_at=excluded.updated_at
            """,
                (
                    post.id,
                    post.type,
                    post.slug,
                    post.title,
                    post.status,
                    post.permalink,
                    post.created_at.isoformat(),
                    post.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return post
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, post_id: int) -> Post | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
            return self._row_to_post(row) if row else None
        finally:
            conn.close()

    def list_posts(self, filters: dict[str, Any]) -> list[Post]:
        conn = self._get_conn()
        try:
            query = "SELECT * FROM posts"
            clauses = []
            params: list[Any] = []
            for key in ("status", "type"):
                if key in filters:
                    clauses.append(f"{key} = ?")
                    params.append(filters[key])
            if clauses:
                query += " WHERE " + " AND ".join(clauses)
            query += " ORDER BY id ASC"

            rows = conn.execute(query, params).fetchall()
            return [self._row_to_post(row) for row in rows]
        finally:
            conn.close()

    def _row_to_post(self, row: dict[str, Any]) -> Post:
        return Post(
            id=row["id"],
            type=row["type"],
            slug=row["slug"],
            title=row["title"],
            status=row["status"],
            permalink=row["permalink"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


class SQLiteMetaStore:
    """Post meta as JSON values in the post_meta table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def get(self, post_id: int, key: str) -> Any | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT meta_value FROM post_meta WHERE post_id = ? AND meta_key = ?",
                (post_id, key),
            ).fetchone()
            if not row:
                return None
            return json.loads(row["meta_value"])
        finally:
            conn.close()

    def exists(self, post_id: int, key: str) -> bool:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT 1 AS found FROM post_meta WHERE post_id = ? AND meta_key = ?",
                (post_id, key),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def set(self, post_id: int, key: str, value: Any) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO post_meta (post_id, meta_key, meta_value)
                VALUES (?, ?, ?)
                ON CONFLICT(post_id, meta_key) DO UPDATE SET
                    meta_value=excluded.meta_value
            """,
                (post_id, key, json.dumps(value)),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def delete(self, post_id: int, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "DELETE FROM post_meta WHERE post_id = ? AND meta_key = ?",
                (post_id, key),
            )
            conn.commit()
        finally:
            conn.close()
