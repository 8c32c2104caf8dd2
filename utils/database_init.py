import os
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        gpa TEXT,
        toefl_score INTEGER,
        sat_gre_score INTEGER,
        budget INTEGER,
        field_of_study TEXT,
        extracurriculars TEXT,
        strength_score INTEGER,
        created_at INTEGER,
        updated_at INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS university_matches (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        profile_id INTEGER NOT NULL REFERENCES profiles(id),
        university_name TEXT NOT NULL,
        program TEXT,
        cost INTEGER,
        match_score INTEGER,
        requirements TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS documents (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        document_type TEXT NOT NULL,
        original_content TEXT NOT NULL,
        enhanced_content TEXT,
        suggestions TEXT,
        created_at INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS research_interests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        primary_area TEXT NOT NULL,
        specific_topics TEXT,
        preferred_universities TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS professor_matches (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        research_interest_id INTEGER NOT NULL REFERENCES research_interests(id),
        professor_name TEXT NOT NULL,
        university TEXT,
        specialization TEXT,
        match_score INTEGER,
        publications TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS visa_applications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        nationality TEXT NOT NULL,
        destination_country TEXT NOT NULL,
        program_type TEXT NOT NULL,
        visa_type TEXT,
        document_status TEXT,
        interview_tips TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cultural_adaptation (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        origin_country TEXT NOT NULL,
        destination_country TEXT NOT NULL,
        cultural_tips TEXT,
        communities TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS career_profiles (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        field_of_study TEXT NOT NULL,
        career_interests TEXT,
        preferred_location TEXT,
        career_paths TEXT,
        job_matches TEXT,
        immigration_info TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        university TEXT NOT NULL,
        program TEXT NOT NULL,
        deadline TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'not-started',
        documents TEXT,
        notes TEXT,
        created_at INTEGER,
        updated_at INTEGER
    )
    """,
)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class AsyncDatabaseInitializer:
    """
    Manage the async SQLite database using the DATABASE_DIR environment variable.

    - The database file is located at: <DATABASE_DIR>/app.db
    - DATABASE_DIR is required. A RuntimeError is raised if it is missing
      or invalid (not a directory and cannot be created).
    - On the first call to `ensure_database()` for a given instance:
        * When `reset` is true (RESET_DATABASE_ON_STARTUP, default on) any
          existing database file at that path is deleted.
        * All guidance tables are created if missing.
    - Subsequent calls to `ensure_database()` on the same instance are no-ops,
      so it is safe for `connection()` to call it.
    """

    def __init__(self, reset: Optional[bool] = None) -> None:
        env_dir = os.getenv("DATABASE_DIR")

        if env_dir is None or not env_dir.strip():
            raise RuntimeError(
                "DATABASE_DIR environment variable must be set to a writable "
                "directory path where the SQLite database file will be stored."
            )

        db_dir = Path(env_dir).expanduser()

        if db_dir.exists() and not db_dir.is_dir():
            raise RuntimeError(
                f"DATABASE_DIR={env_dir!r} points to a file, not a directory "
                f"({db_dir}). Please set DATABASE_DIR to a directory path."
            )

        try:
            db_dir.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to create or access database directory at {db_dir}"
            ) from exc

        self.db_dir = db_dir
        self.db_path = self.db_dir / "app.db"
        self.reset = _env_flag("RESET_DATABASE_ON_STARTUP", True) if reset is None else reset

        self._initialized = False

    async def ensure_database(self) -> None:
        """
        Ensure the SQLite database and its tables exist at `self.db_path`.

        Subsequent calls on the same instance are no-ops.
        """
        if self._initialized:
            return

        if self.reset and self.db_path.exists():
            try:
                self.db_path.unlink()
            except Exception as exc:
                raise RuntimeError(
                    f"Failed to delete existing database at {self.db_path}"
                ) from exc

        max_attempts = 3
        for attempt in range(1, max_attempts + 1):
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    for statement in SCHEMA:
                        await db.execute(statement)
                    await db.commit()
                break
            except FileNotFoundError:
                # On some platforms a transient missing file error may occur; retry a few times.
                if attempt >= max_attempts:
                    raise
                await asyncio.sleep(0.1 * attempt)

        self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Async context manager yielding an `aiosqlite.Connection`.

        The database is created on first use via `ensure_database()`.
        """
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()
