"""SQLite cache storage implementation."""

import json
import sqlite3
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .models import CacheEntry, CacheStore, candidate_from_dict, candidate_to_dict


class SQLiteCacheStore(CacheStore):
    """SQLite-based cache store for search results.

    Stores candidate metadata in a SQLite database while preview audio is
    stored separately on the filesystem. Writes replace any entry with the
    same hash. Expired entries are removed when read, and the least
    recently used entries beyond max_entries are evicted after each write.
    """

    def __init__(
        self,
        cache_dir: Path,
        max_entries: int = 500,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize cache storage with database in given directory.

        Args:
            cache_dir: Directory containing cache database and audio files
            max_entries: Maximum number of entries kept
            ttl_seconds: Entry lifetime in seconds, or None for no expiry
            clock: Returns the current time in epoch seconds
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.cache_dir = cache_dir
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self.clock = clock

        # Create cache directories if they don't exist
        cache_dir.mkdir(parents=True, exist_ok=True)
        self.audio_dir = cache_dir / "audio"
        self.audio_dir.mkdir(exist_ok=True)

        self.db_path = cache_dir / "results.db"
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection with WAL mode for concurrency."""
        conn = sqlite3.connect(
            str(self.db_path),
            timeout=30.0,  # 30 second timeout if locked
            check_same_thread=False,  # Allow use across threads
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=30000")
        conn.execute("PRAGMA synchronous=NORMAL")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema with tables and indexes."""
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS results (
                    content_hash TEXT PRIMARY KEY,
                    candidate TEXT NOT NULL,
                    audio_path TEXT,
                    created_at REAL NOT NULL,
                    last_used REAL NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_last_used
                ON results(last_used)
            """)
            conn.commit()
        finally:
            conn.close()

    def _audio_path(self, content_hash: str) -> Path:
        return self.audio_dir / f"{content_hash}.mp3"

    def get(self, content_hash: str) -> CacheEntry | None:
        """Retrieve a live cache entry by hash.

        Args:
            content_hash: Hash of the normalized description

        Returns:
            Cache entry if found and not expired, None otherwise
        """
        now = self.clock()
        conn = self._get_connection()
        try:
            row = conn.execute(
                """
                SELECT content_hash, candidate, audio_path, created_at
                FROM results
                WHERE content_hash = ?
            """,
                (content_hash,),
            ).fetchone()
            if row is None:
                return None

            if self.ttl_seconds is not None and now - row["created_at"] > self.ttl_seconds:
                conn.execute("DELETE FROM results WHERE content_hash = ?", (content_hash,))
                conn.commit()
                self._remove_audio(row["audio_path"])
                return None

            conn.execute(
                "UPDATE results SET last_used = ? WHERE content_hash = ?",
                (now, content_hash),
            )
            conn.commit()
        finally:
            conn.close()

        audio = None
        if row["audio_path"]:
            audio_path = Path(row["audio_path"])
            if not audio_path.exists():
                # Metadata without its payload is unusable
                return None
            audio = audio_path.read_bytes()

        return CacheEntry(
            content_hash=row["content_hash"],
            candidate=candidate_from_dict(json.loads(row["candidate"]), audio),
            created_at=datetime.fromtimestamp(row["created_at"]),
        )

    def set(self, entry: CacheEntry) -> None:
        """Save cache entry, replacing any entry with the same hash.

        The stored age is measured with this store's clock, not
        entry.created_at.

        Args:
            entry: Cache entry to save
        """
        audio_path = None
        if entry.candidate.audio:
            audio_path = self._audio_path(entry.content_hash)
            audio_path.write_bytes(entry.candidate.audio)

        now = self.clock()
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO results
                    (content_hash, candidate, audio_path, created_at, last_used)
                VALUES (?, ?, ?, ?, ?)
            """,
                (
                    entry.content_hash,
                    json.dumps(candidate_to_dict(entry.candidate)),
                    str(audio_path) if audio_path else None,
                    now,
                    now,
                ),
            )
            evicted = conn.execute(
                """
                SELECT content_hash, audio_path FROM results
                ORDER BY last_used DESC
                LIMIT -1 OFFSET ?
            """,
                (self.max_entries,),
            ).fetchall()
            conn.executemany(
                "DELETE FROM results WHERE content_hash = ?",
                [(row["content_hash"],) for row in evicted],
            )
            conn.commit()
        finally:
            conn.close()

        for row in evicted:
            self._remove_audio(row["audio_path"])

    def count(self) -> int:
        """Number of stored entries."""
        conn = self._get_connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM results").fetchone()[0]
        finally:
            conn.close()

    @staticmethod
    def _remove_audio(audio_path: str | None) -> None:
        if audio_path:
            Path(audio_path).unlink(missing_ok=True)
