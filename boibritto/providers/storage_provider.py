"""
Storage provider for BoiBritto.
SQLite-backed persistence for every entity; methods return plain dicts.
"""

import json
import sqlite3
from datetime import datetime, timezone

from uuid6 import uuid7

from boibritto.logger import logger
from boibritto.settings import DB_PATH

# Columns persisted as JSON text and decoded back into lists
JSON_COLUMNS = {"genres", "interested_genres", "tags", "books"}
BOOL_COLUMNS = {"is_completed", "spoiler_alert"}

# kind -> (membership table, target column)
LIKE_TABLES = {
    "book": ("book_likes", "book_id"),
    "chapter": ("chapter_likes", "chapter_id"),
}


class DuplicateRecordError(Exception):
    """A write violated a uniqueness constraint."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid7())


def _encode(value):
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _owner_select(alias: str) -> str:
    return (
        f"{alias}.username AS owner_username, "
        f"{alias}.display_name AS owner_display_name, "
        f"{alias}.avatar AS owner_avatar"
    )


def _row_to_dict(row: sqlite3.Row, owner_key: str | None = None, owner_id_field: str | None = None) -> dict:
    """Decode JSON/bool columns and nest joined owner columns under ``owner_key``."""
    data = dict(row)
    for key in JSON_COLUMNS & data.keys():
        raw = data[key]
        if not raw:
            data[key] = []
            continue
        try:
            data[key] = json.loads(raw)
        except json.JSONDecodeError:
            data[key] = []
    for key in BOOL_COLUMNS & data.keys():
        data[key] = bool(data[key])
    if owner_key:
        data[owner_key] = {
            "id": data[owner_id_field],
            "username": data.pop("owner_username", None),
            "display_name": data.pop("owner_display_name", None),
            "avatar": data.pop("owner_avatar", None),
        }
    return data


class SQLiteStorage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path
        self.init_tables()
        logger.info(f"SQLiteStorage initialized with db: {self.db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_tables(self) -> None:
        """Initialize required database tables."""
        with self._get_connection() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    uid TEXT NOT NULL UNIQUE,
                    email TEXT NOT NULL UNIQUE,
                    username TEXT NOT NULL UNIQUE,
                    display_name TEXT NOT NULL UNIQUE,
                    bio TEXT,
                    avatar TEXT,
                    interested_genres TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS user_books (
                    id TEXT PRIMARY KEY,
                    author_id TEXT NOT NULL REFERENCES users(id),
                    title TEXT NOT NULL,
                    synopsis TEXT,
                    genres TEXT,
                    visibility TEXT NOT NULL DEFAULT 'private',
                    cover_image TEXT,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS book_likes (
                    book_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (book_id, user_id)
                );

                CREATE TABLE IF NOT EXISTS chapters (
                    id TEXT PRIMARY KEY,
                    book_id TEXT NOT NULL REFERENCES user_books(id),
                    author_id TEXT NOT NULL REFERENCES users(id),
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    chapter_number INTEGER NOT NULL,
                    visibility TEXT NOT NULL DEFAULT 'private',
                    word_count INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE (book_id, chapter_number)
                );

                CREATE TABLE IF NOT EXISTS chapter_likes (
                    chapter_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (chapter_id, user_id)
                );

                CREATE TABLE IF NOT EXISTS discussions (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES users(id),
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    topic TEXT,
                    visibility TEXT NOT NULL DEFAULT 'public',
                    spoiler_alert INTEGER NOT NULL DEFAULT 0,
                    genres TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS comments (
                    id TEXT PRIMARY KEY,
                    discussion_id TEXT NOT NULL REFERENCES discussions(id),
                    user_id TEXT NOT NULL REFERENCES users(id),
                    content TEXT NOT NULL,
                    spoiler_alert INTEGER NOT NULL DEFAULT 0,
                    parent_comment TEXT REFERENCES comments(id),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS reports (
                    id TEXT PRIMARY KEY,
                    reporter_id TEXT NOT NULL REFERENCES users(id),
                    report_type TEXT NOT NULL,
                    target_id TEXT NOT NULL,
                    reason TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'pending',
                    admin_notes TEXT,
                    reviewed_by TEXT,
                    reviewed_at TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE (reporter_id, target_id, report_type)
                );

                CREATE TABLE IF NOT EXISTS blogs (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES users(id),
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    visibility TEXT NOT NULL DEFAULT 'public',
                    spoiler_alert INTEGER NOT NULL DEFAULT 0,
                    genres TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS collections (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES users(id),
                    title TEXT NOT NULL,
                    description TEXT,
                    books TEXT,
                    tags TEXT,
                    visibility TEXT NOT NULL DEFAULT 'public',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS reading_list (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES users(id),
                    volume_id TEXT NOT NULL,
                    status TEXT NOT NULL,
                    started_at TEXT,
                    completed_at TEXT,
                    visibility TEXT NOT NULL DEFAULT 'public',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE (user_id, volume_id)
                );

                CREATE INDEX IF NOT EXISTS idx_user_books_author ON user_books(author_id);
                CREATE INDEX IF NOT EXISTS idx_chapters_book ON chapters(book_id);
                CREATE INDEX IF NOT EXISTS idx_comments_discussion ON comments(discussion_id);
                CREATE INDEX IF NOT EXISTS idx_comments_parent ON comments(parent_comment);
                CREATE INDEX IF NOT EXISTS idx_reports_reporter ON reports(reporter_id);
                """
            )
            conn.commit()

    # ===== Generic helpers =====

    def _insert(self, table: str, data: dict) -> str:
        """Insert a row, filling id and timestamps. Returns the row id."""
        now = _now()
        row = {"id": _new_id(), "created_at": now, "updated_at": now, **data}
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            with self._get_connection() as conn:
                conn.execute(
                    f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                    [_encode(v) for v in row.values()],
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            raise DuplicateRecordError(str(e)) from e
        return row["id"]

    def _update(self, table: str, row_id: str, data: dict) -> bool:
        fields = []
        values = []
        for key, value in data.items():
            if key in ["id", "created_at"]:
                continue
            fields.append(f"{key} = ?")
            values.append(_encode(value))

        if not fields:
            return False

        fields.append("updated_at = ?")
        values.append(_now())
        values.append(row_id)
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(f"UPDATE {table} SET {', '.join(fields)} WHERE id = ?", values)
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.IntegrityError as e:
            raise DuplicateRecordError(str(e)) from e

    def _delete(self, table: str, row_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _get_owned(self, table: str, row_id: str, owner_col: str) -> dict | None:
        """Fetch a row with its owner's public profile nested under ``user``."""
        with self._get_connection() as conn:
            row = conn.execute(
                f"""
                SELECT t.*, {_owner_select("u")}
                FROM {table} t LEFT JOIN users u ON u.id = t.{owner_col}
                WHERE t.id = ?
                """,
                (row_id,),
            ).fetchone()
            return _row_to_dict(row, "user", owner_col) if row else None

    def _list_owned(
        self,
        table: str,
        owner_id: str | None = None,
        public_only: bool = True,
        search: str | None = None,
        order_by: str = "created_at",
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """
        List rows of a ``user_id``-owned table.

        owner_id=None lists everyone's rows; public_only restricts to
        visibility = 'public'. Search matches the title case-insensitively.
        Returns (rows, total_matching).
        """
        where = []
        params: list = []
        if owner_id is not None:
            where.append("t.user_id = ?")
            params.append(owner_id)
        if public_only:
            where.append("t.visibility = 'public'")
        if search:
            where.append("LOWER(t.title) LIKE ?")
            params.append(f"%{search.lower()}%")
        clause = f"WHERE {' AND '.join(where)}" if where else ""

        with self._get_connection() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM {table} t {clause}", params).fetchone()[0]
            query = f"""
                SELECT t.*, {_owner_select("u")}
                FROM {table} t LEFT JOIN users u ON u.id = t.user_id
                {clause}
                ORDER BY t.{order_by} DESC, t.id DESC
            """
            page_params = list(params)
            if limit is not None:
                query += " LIMIT ? OFFSET ?"
                page_params += [limit, offset]
            rows = conn.execute(query, page_params).fetchall()
            return [_row_to_dict(r, "user", "user_id") for r in rows], total

    def _likes_for(self, conn: sqlite3.Connection, kind: str, target_ids: list[str]) -> dict[str, list[str]]:
        """Map target id -> list of liking user ids, in one query."""
        table, column = LIKE_TABLES[kind]
        likes: dict[str, list[str]] = {target_id: [] for target_id in target_ids}
        if not target_ids:
            return likes
        placeholders = ", ".join("?" for _ in target_ids)
        rows = conn.execute(
            f"SELECT {column}, user_id FROM {table} WHERE {column} IN ({placeholders}) ORDER BY created_at",
            target_ids,
        ).fetchall()
        for row in rows:
            likes[row[column]].append(row["user_id"])
        return likes

    # ===== User methods =====

    def create_user(self, user_data: dict) -> dict:
        """Create a new user. Raises DuplicateRecordError on uid/email/username/display_name clash."""
        user_id = self._insert(
            "users",
            {
                "uid": user_data["uid"],
                "email": user_data["email"],
                "username": user_data["username"],
                "display_name": user_data["display_name"],
                "bio": user_data.get("bio"),
                "avatar": user_data.get("avatar"),
                "interested_genres": user_data.get("interested_genres", []),
            },
        )
        logger.info(f"User created: {user_id}")
        return self.get_user(user_id)

    def get_user(self, user_id: str) -> dict | None:
        """Get a user by ID."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return _row_to_dict(row) if row else None

    def get_user_by_uid(self, uid: str) -> dict | None:
        """Get a user by Firebase UID."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            return _row_to_dict(row) if row else None

    # ===== UserBook methods =====

    def create_book(self, data: dict) -> dict:
        book_id = self._insert("user_books", data)
        return self.get_book(book_id)

    def get_book(self, book_id: str) -> dict | None:
        """Get a book with its author summary and likes."""
        with self._get_connection() as conn:
            row = conn.execute(
                f"""
                SELECT b.*, {_owner_select("u")}
                FROM user_books b LEFT JOIN users u ON u.id = b.author_id
                WHERE b.id = ?
                """,
                (book_id,),
            ).fetchone()
            if not row:
                return None
            book = _row_to_dict(row, "author", "author_id")
            book["likes"] = self._likes_for(conn, "book", [book_id])[book_id]
            book["like_count"] = len(book["likes"])
            return book

    def list_books(
        self,
        author_id: str | None = None,
        public_only: bool = True,
        search: str | None = None,
        genre: str | None = None,
        completed: bool | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """
        List books newest first, each with chapter_count and total_word_count.

        Returns (books, total_matching).
        """
        where = []
        params: list = []
        if author_id is not None:
            where.append("b.author_id = ?")
            params.append(author_id)
        if public_only:
            where.append("b.visibility = 'public'")
        if search:
            where.append("LOWER(b.title) LIKE ?")
            params.append(f"%{search.lower()}%")
        if genre:
            where.append("EXISTS (SELECT 1 FROM json_each(b.genres) WHERE json_each.value = ?)")
            params.append(genre)
        if completed is not None:
            where.append("b.is_completed = ?")
            params.append(1 if completed else 0)
        clause = f"WHERE {' AND '.join(where)}" if where else ""

        with self._get_connection() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM user_books b {clause}", params).fetchone()[0]
            rows = conn.execute(
                f"""
                SELECT b.*, {_owner_select("u")},
                       COALESCE(s.chapter_count, 0) AS chapter_count,
                       COALESCE(s.total_word_count, 0) AS total_word_count
                FROM user_books b
                LEFT JOIN users u ON u.id = b.author_id
                LEFT JOIN (
                    SELECT book_id, COUNT(*) AS chapter_count, SUM(word_count) AS total_word_count
                    FROM chapters GROUP BY book_id
                ) s ON s.book_id = b.id
                {clause}
                ORDER BY b.created_at DESC, b.id DESC
                LIMIT ? OFFSET ?
                """,
                params + [limit, offset],
            ).fetchall()
            books = [_row_to_dict(r, "author", "author_id") for r in rows]
            likes = self._likes_for(conn, "book", [b["id"] for b in books])
            for book in books:
                book["likes"] = likes[book["id"]]
                book["like_count"] = len(book["likes"])
            return books, total

    def update_book(self, book_id: str, data: dict) -> dict | None:
        self._update("user_books", book_id, data)
        return self.get_book(book_id)

    def delete_book(self, book_id: str) -> int:
        """
        Delete a book, its chapters and all their likes in one transaction.
        Returns the number of chapters deleted.
        """
        with self._get_connection() as conn:
            conn.execute(
                "DELETE FROM chapter_likes WHERE chapter_id IN (SELECT id FROM chapters WHERE book_id = ?)",
                (book_id,),
            )
            chapters = conn.execute("DELETE FROM chapters WHERE book_id = ?", (book_id,)).rowcount
            conn.execute("DELETE FROM book_likes WHERE book_id = ?", (book_id,))
            conn.execute("DELETE FROM user_books WHERE id = ?", (book_id,))
            conn.commit()
        logger.info(f"Book deleted: {book_id}", extra={"chapters_deleted": chapters})
        return chapters

    def count_chapters(self, book_id: str, visibility: str | None = None) -> int:
        """Count a book's chapters, optionally only those with ``visibility``."""
        with self._get_connection() as conn:
            if visibility is None:
                return conn.execute(
                    "SELECT COUNT(*) FROM chapters WHERE book_id = ?", (book_id,)
                ).fetchone()[0]
            return conn.execute(
                "SELECT COUNT(*) FROM chapters WHERE book_id = ? AND visibility = ?",
                (book_id, visibility),
            ).fetchone()[0]

    # ===== Chapter methods =====

    def create_chapter(self, data: dict) -> dict:
        """Raises DuplicateRecordError when the chapter number is taken."""
        chapter_id = self._insert("chapters", data)
        return self.get_chapter(chapter_id)

    def get_chapter(self, chapter_id: str) -> dict | None:
        """Get a chapter with content, likes and a summary of its book."""
        with self._get_connection() as conn:
            row = conn.execute(
                f"""
                SELECT c.*, {_owner_select("u")},
                       b.title AS book_title, b.author_id AS book_author_id
                FROM chapters c
                LEFT JOIN users u ON u.id = c.author_id
                LEFT JOIN user_books b ON b.id = c.book_id
                WHERE c.id = ?
                """,
                (chapter_id,),
            ).fetchone()
            if not row:
                return None
            chapter = _row_to_dict(row, "author", "author_id")
            chapter["book"] = {
                "id": chapter["book_id"],
                "title": chapter.pop("book_title"),
                "author_id": chapter.pop("book_author_id"),
                "author": chapter["author"],
            }
            chapter["likes"] = self._likes_for(conn, "chapter", [chapter_id])[chapter_id]
            chapter["like_count"] = len(chapter["likes"])
            return chapter

    def get_chapter_by_number(self, book_id: str, chapter_number: int) -> dict | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM chapters WHERE book_id = ? AND chapter_number = ?",
                (book_id, chapter_number),
            ).fetchone()
            return _row_to_dict(row) if row else None

    def list_chapters(self, book_id: str, visibility: str | None = None) -> list[dict]:
        """List a book's chapters by chapter number, without content."""
        query = f"""
            SELECT c.id, c.book_id, c.author_id, c.title, c.chapter_number, c.visibility,
                   c.word_count, c.created_at, c.updated_at, {_owner_select("u")}
            FROM chapters c LEFT JOIN users u ON u.id = c.author_id
            WHERE c.book_id = ?
        """
        params: list = [book_id]
        if visibility is not None:
            query += " AND c.visibility = ?"
            params.append(visibility)
        query += " ORDER BY c.chapter_number ASC"

        with self._get_connection() as conn:
            chapters = [_row_to_dict(r, "author", "author_id") for r in conn.execute(query, params)]
            likes = self._likes_for(conn, "chapter", [c["id"] for c in chapters])
            for chapter in chapters:
                chapter["likes"] = likes[chapter["id"]]
                chapter["like_count"] = len(chapter["likes"])
            return chapters

    def update_chapter(self, chapter_id: str, data: dict) -> dict | None:
        self._update("chapters", chapter_id, data)
        return self.get_chapter(chapter_id)

    def delete_chapter(self, chapter_id: str) -> bool:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM chapter_likes WHERE chapter_id = ?", (chapter_id,))
            cursor = conn.execute("DELETE FROM chapters WHERE id = ?", (chapter_id,))
            conn.commit()
            return cursor.rowcount > 0

    # ===== Like methods =====

    def toggle_like(self, kind: str, target_id: str, user_id: str) -> tuple[bool, int]:
        """
        Flip ``user_id``'s like on a book or chapter within one transaction.

        Returns (liked, like_count) after the flip.
        """
        table, column = LIKE_TABLES[kind]
        with self._get_connection() as conn:
            removed = conn.execute(
                f"DELETE FROM {table} WHERE {column} = ? AND user_id = ?",
                (target_id, user_id),
            ).rowcount
            if not removed:
                conn.execute(
                    f"INSERT OR IGNORE INTO {table} ({column}, user_id, created_at) VALUES (?, ?, ?)",
                    (target_id, user_id, _now()),
                )
            count = conn.execute(
                f"SELECT COUNT(*) FROM {table} WHERE {column} = ?", (target_id,)
            ).fetchone()[0]
            conn.commit()
        return not removed, count

    # ===== Discussion methods =====

    def create_discussion(self, data: dict) -> dict:
        return self.get_discussion(self._insert("discussions", data))

    def get_discussion(self, discussion_id: str) -> dict | None:
        return self._get_owned("discussions", discussion_id, "user_id")

    def list_discussions(
        self,
        user_id: str | None = None,
        search: str | None = None,
        limit: int = 20,
    ) -> list[dict]:
        """Public discussions, most recently updated first."""
        discussions, _ = self._list_owned(
            "discussions", owner_id=user_id, search=search, order_by="updated_at", limit=limit
        )
        return discussions

    def update_discussion(self, discussion_id: str, data: dict) -> dict | None:
        self._update("discussions", discussion_id, data)
        return self.get_discussion(discussion_id)

    def delete_discussion(self, discussion_id: str) -> int:
        """Delete a discussion and all its comments together. Returns comments deleted."""
        with self._get_connection() as conn:
            comments = conn.execute(
                "DELETE FROM comments WHERE discussion_id = ?", (discussion_id,)
            ).rowcount
            conn.execute("DELETE FROM discussions WHERE id = ?", (discussion_id,))
            conn.commit()
        return comments

    # ===== Comment methods =====

    def create_comment(self, data: dict) -> dict:
        return self.get_comment(self._insert("comments", data))

    def get_comment(self, comment_id: str) -> dict | None:
        return self._get_owned("comments", comment_id, "user_id")

    def list_comments(self, discussion_id: str) -> list[dict]:
        """All comments of a discussion (both levels), oldest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                f"""
                SELECT c.*, {_owner_select("u")}
                FROM comments c LEFT JOIN users u ON u.id = c.user_id
                WHERE c.discussion_id = ?
                ORDER BY c.created_at ASC, c.id ASC
                """,
                (discussion_id,),
            ).fetchall()
            return [_row_to_dict(r, "user", "user_id") for r in rows]

    def update_comment(self, comment_id: str, data: dict) -> dict | None:
        self._update("comments", comment_id, data)
        return self.get_comment(comment_id)

    def delete_comment(self, comment_id: str) -> int:
        """Delete a comment together with its replies. Returns the total deleted."""
        with self._get_connection() as conn:
            replies = conn.execute(
                "DELETE FROM comments WHERE parent_comment = ?", (comment_id,)
            ).rowcount
            deleted = conn.execute("DELETE FROM comments WHERE id = ?", (comment_id,)).rowcount
            conn.commit()
        return replies + deleted

    # ===== Report methods =====

    def create_report(self, data: dict) -> dict:
        """Raises DuplicateRecordError if this reporter already reported the target."""
        report_id = self._insert("reports", data)
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM reports WHERE id = ?", (report_id,)).fetchone()
            return dict(row)

    def find_report(self, reporter_id: str, target_id: str, report_type: str) -> dict | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM reports WHERE reporter_id = ? AND target_id = ? AND report_type = ?",
                (reporter_id, target_id, report_type),
            ).fetchone()
            return dict(row) if row else None

    def list_reports(
        self,
        reporter_id: str,
        status: str | None = None,
        report_type: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """A reporter's own reports, newest first. Returns (reports, total)."""
        where = ["reporter_id = ?"]
        params: list = [reporter_id]
        if status:
            where.append("status = ?")
            params.append(status)
        if report_type:
            where.append("report_type = ?")
            params.append(report_type)
        clause = " AND ".join(where)

        with self._get_connection() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM reports WHERE {clause}", params).fetchone()[0]
            rows = conn.execute(
                f"""
                SELECT id, report_type, target_id, reason, description, status, created_at, updated_at
                FROM reports WHERE {clause}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params + [limit, offset],
            ).fetchall()
            return [dict(r) for r in rows], total

    # ===== Blog methods =====

    def create_blog(self, data: dict) -> dict:
        return self.get_blog(self._insert("blogs", data))

    def get_blog(self, blog_id: str) -> dict | None:
        return self._get_owned("blogs", blog_id, "user_id")

    def list_blogs(self, **kwargs) -> tuple[list[dict], int]:
        return self._list_owned("blogs", **kwargs)

    def update_blog(self, blog_id: str, data: dict) -> dict | None:
        self._update("blogs", blog_id, data)
        return self.get_blog(blog_id)

    def delete_blog(self, blog_id: str) -> bool:
        return self._delete("blogs", blog_id)

    # ===== Collection methods =====

    def create_collection(self, data: dict) -> dict:
        return self.get_collection(self._insert("collections", data))

    def get_collection(self, collection_id: str) -> dict | None:
        return self._get_owned("collections", collection_id, "user_id")

    def list_collections(self, **kwargs) -> tuple[list[dict], int]:
        return self._list_owned("collections", **kwargs)

    def update_collection(self, collection_id: str, data: dict) -> dict | None:
        self._update("collections", collection_id, data)
        return self.get_collection(collection_id)

    def delete_collection(self, collection_id: str) -> bool:
        return self._delete("collections", collection_id)

    # ===== Reading list methods =====

    def create_reading_item(self, data: dict) -> dict:
        """Raises DuplicateRecordError if the volume is already on the user's list."""
        return self.get_reading_item(self._insert("reading_list", data))

    def get_reading_item(self, item_id: str) -> dict | None:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM reading_list WHERE id = ?", (item_id,)).fetchone()
            return dict(row) if row else None

    def list_reading_items(
        self,
        user_id: str,
        public_only: bool = False,
        order_by: str = "created_at",
        limit: int | None = None,
    ) -> list[dict]:
        query = "SELECT * FROM reading_list WHERE user_id = ?"
        if public_only:
            query += " AND visibility = 'public'"
        query += f" ORDER BY {order_by} DESC, id DESC"
        params: list = [user_id]
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        with self._get_connection() as conn:
            return [dict(r) for r in conn.execute(query, params)]

    def update_reading_item(self, item_id: str, data: dict) -> dict | None:
        self._update("reading_list", item_id, data)
        return self.get_reading_item(item_id)

    def delete_reading_item(self, item_id: str) -> bool:
        return self._delete("reading_list", item_id)


# Singleton instance cache
_storage_provider_instance: SQLiteStorage | None = None


def get_storage_provider() -> SQLiteStorage:
    """Factory function to get the configured storage provider (singleton)."""
    global _storage_provider_instance

    if _storage_provider_instance is None:
        _storage_provider_instance = SQLiteStorage()

    return _storage_provider_instance
