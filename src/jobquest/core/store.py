from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from jobquest.core.models import JobApplication, JobCreate, utc_now_iso

log = logging.getLogger(__name__)

_COLUMNS = "id, company, role, location, status, created_at"


class StoreError(RuntimeError):
    """Raised when the record store cannot be reached or a statement fails."""


def sqlite_path_from_database_url(database_url: str) -> str:
    """Convert sqlite:///path into local path."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "", 1)
    if "://" in database_url:
        raise StoreError(f"Unsupported store connection string: {database_url.split('://', 1)[0]}://")
    # fallback: treat as file
    return database_url


class JobStore:
    """
    Description: Persistent collection of job applications backed by SQLite.
    Input: DATABASE_URL connection string
    Output: list/create/delete round trips, one connection per call
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self._db_path = sqlite_path_from_database_url(database_url)

    @property
    def db_path(self) -> str:
        return self._db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            con = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open store at {self._db_path}: {e}") from e
        try:
            yield con
            con.commit()
        except sqlite3.Error as e:
            con.rollback()
            raise StoreError(str(e)) from e
        finally:
            con.close()

    def connect(self) -> None:
        """
        Description: Verify the store is reachable and create the schema.
        Input: None
        Output: None (raises StoreError on failure)
        """
        if self._db_path != ":memory:":
            try:
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreError(f"cannot create store directory for {self._db_path}: {e}") from e
        with self._connect() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS jobs (
                    id TEXT PRIMARY KEY,
                    company TEXT NOT NULL CHECK (length(company) > 0),
                    role TEXT NOT NULL CHECK (length(role) > 0),
                    location TEXT,
                    status TEXT NOT NULL DEFAULT 'Applied'
                        CHECK (status IN ('Applied', 'Interview', 'Offer', 'Rejected')),
                    created_at TEXT NOT NULL
                )
                """
            )
            con.execute("CREATE INDEX IF NOT EXISTS idx_jobs_created_at ON jobs(created_at)")
        log.info("Job store ready at %s", self._db_path)

    def list_jobs(self) -> List[JobApplication]:
        """All records, newest first."""
        with self._connect() as con:
            rows = con.execute(
                f"SELECT {_COLUMNS} FROM jobs ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [_row_to_job(r) for r in rows]

    def create_job(self, job: JobCreate) -> JobApplication:
        record = JobApplication(
            id=uuid.uuid4().hex,
            company=job.company,
            role=job.role,
            location=job.location,
            status=job.status,
            created_at=utc_now_iso(),
        )
        with self._connect() as con:
            con.execute(
                f"INSERT INTO jobs({_COLUMNS}) VALUES(?,?,?,?,?,?)",
                (record.id, record.company, record.role, record.location, record.status, record.created_at),
            )
        return record

    def delete_job(self, job_id: str) -> bool:
        """Remove a record by id; returns False when nothing matched."""
        with self._connect() as con:
            cur = con.execute("DELETE FROM jobs WHERE id=?", (job_id,))
            return cur.rowcount > 0

    def count_jobs(self) -> int:
        with self._connect() as con:
            row = con.execute("SELECT COUNT(*) FROM jobs").fetchone()
        return int(row[0]) if row else 0


def _row_to_job(row: tuple) -> JobApplication:
    job_id, company, role, location, status, created_at = row
    return JobApplication(
        id=job_id,
        company=company,
        role=role,
        location=location,
        status=status,
        created_at=created_at,
    )
