"""SQLite store for deployment windows.

One table (`deployments`), created on first use. The connection is opened
lazily and shared for the lifetime of the process; SQLite handles its own
locking, so concurrent writers are serialized by the database itself.
"""
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from .models import DeploymentFields, DeploymentWindow

logger = logger.bind(module="store")

# ============== SQL Schema ==============

_INIT_SQL = """
CREATE TABLE IF NOT EXISTS deployments (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    title         TEXT NOT NULL CHECK (length(trim(title)) > 0),
    time_ms       INTEGER NOT NULL,
    team_issuer   TEXT NOT NULL CHECK (length(trim(team_issuer)) > 0),
    issuer_name   TEXT NOT NULL CHECK (length(trim(issuer_name)) > 0),
    crq           TEXT,
    rlm           TEXT,
    mop_link      TEXT,
    created_at_ms INTEGER NOT NULL,
    updated_at_ms INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_deployments_time ON deployments(time_ms);
"""

_SELECT = "SELECT * FROM deployments"


def _row_to_window(row: sqlite3.Row) -> DeploymentWindow:
    """Convert a database row to a DeploymentWindow."""
    return DeploymentWindow(
        id=row["id"],
        title=row["title"],
        time_ms=row["time_ms"],
        team_issuer=row["team_issuer"],
        issuer_name=row["issuer_name"],
        crq=row["crq"],
        rlm=row["rlm"],
        mop_link=row["mop_link"],
        created_at_ms=row["created_at_ms"],
        updated_at_ms=row["updated_at_ms"],
    )


def _fields_params(fields: DeploymentFields) -> tuple[Any, ...]:
    return (
        fields.title,
        fields.time_ms,
        fields.team_issuer,
        fields.issuer_name,
        fields.crq,
        fields.rlm,
        fields.mop_link,
    )


class DeploymentStore:
    """SQLite-backed store for deployment windows."""

    def __init__(self, db_path: str | Path):
        """Initialize store.

        Args:
            db_path: Path to the SQLite database file, or ":memory:"
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path).expanduser()
        self._db: sqlite3.Connection | None = None
        self._initialized = False

    # ============== Lifecycle ==============

    async def initialize(self) -> None:
        """Open SQLite and create the schema if it does not exist."""
        if self._initialized:
            return

        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._db = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._db.row_factory = sqlite3.Row
        if isinstance(self.db_path, Path):
            self._db.execute("PRAGMA journal_mode=WAL")
        self._db.execute("PRAGMA synchronous=NORMAL")
        self._db.executescript(_INIT_SQL)
        self._initialized = True

        logger.info(f"Store initialized: {self.db_path}")

    async def ensure_initialized(self) -> None:
        """Initialize on first use."""
        if not self._initialized:
            await self.initialize()

    async def close(self) -> None:
        """Close store."""
        if self._db:
            self._db.close()
            self._db = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _conn(self) -> sqlite3.Connection:
        assert self._db is not None, "store is not initialized"
        return self._db

    # ============== Queries ==============

    async def list_all(self) -> list[DeploymentWindow]:
        """List all deployment windows ordered by time ascending."""
        rows = self._conn().execute(
            f"{_SELECT} ORDER BY time_ms ASC, id ASC"
        ).fetchall()
        return [_row_to_window(row) for row in rows]

    async def get(self, deployment_id: int) -> DeploymentWindow | None:
        """Get a deployment window by id."""
        row = self._conn().execute(
            f"{_SELECT} WHERE id = ?", (deployment_id,)
        ).fetchone()
        return _row_to_window(row) if row else None

    async def list_between(self, start_ms: int, end_ms: int) -> list[DeploymentWindow]:
        """List windows with start_ms <= time <= end_ms, time ascending."""
        rows = self._conn().execute(
            f"{_SELECT} WHERE time_ms >= ? AND time_ms <= ? ORDER BY time_ms ASC, id ASC",
            (start_ms, end_ms),
        ).fetchall()
        return [_row_to_window(row) for row in rows]

    # ============== CRUD ==============

    async def create(self, fields: DeploymentFields) -> DeploymentWindow:
        """Persist a new deployment window."""
        now_ms = int(datetime.now().timestamp() * 1000)
        db = self._conn()
        cursor = db.execute(
            """INSERT INTO deployments
               (title, time_ms, team_issuer, issuer_name, crq, rlm, mop_link,
                created_at_ms, updated_at_ms)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            _fields_params(fields) + (now_ms, now_ms),
        )
        db.commit()

        window = DeploymentWindow(id=cursor.lastrowid, created_at_ms=now_ms, updated_at_ms=now_ms)
        window.apply(fields)
        logger.debug(f"Created deployment {window.id}")
        return window

    async def update(self, deployment_id: int, fields: DeploymentFields) -> DeploymentWindow | None:
        """Replace all editable fields of a window.

        Returns:
            The updated window, or None if the id does not exist
        """
        now_ms = int(datetime.now().timestamp() * 1000)
        db = self._conn()
        cursor = db.execute(
            """UPDATE deployments SET
                title = ?, time_ms = ?, team_issuer = ?, issuer_name = ?,
                crq = ?, rlm = ?, mop_link = ?, updated_at_ms = ?
               WHERE id = ?""",
            _fields_params(fields) + (now_ms, deployment_id),
        )
        db.commit()

        if cursor.rowcount == 0:
            return None

        logger.debug(f"Updated deployment {deployment_id}")
        return await self.get(deployment_id)

    async def delete(self, deployment_id: int) -> bool:
        """Permanently delete a window."""
        db = self._conn()
        cursor = db.execute("DELETE FROM deployments WHERE id = ?", (deployment_id,))
        db.commit()
        return cursor.rowcount > 0

    async def count(self) -> int:
        row = self._conn().execute("SELECT COUNT(*) AS cnt FROM deployments").fetchone()
        return row["cnt"] if row else 0
