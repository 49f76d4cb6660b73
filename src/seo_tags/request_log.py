# src/seo_tags/request_log.py
"""Request log backends: in-memory, local SQLite, and a no-op log.

Only request metadata (url, request date) is stored; analysis results are
never persisted.
"""

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional

from seo_tags.config import settings
from seo_tags.models import RequestRecord

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS seo_requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL,
    request_date TEXT NOT NULL
);
"""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AbstractRequestLog(ABC):
    """Abstract base class defining the request log interface."""

    @abstractmethod
    def record(self, url: str, request_date: Optional[str] = None) -> RequestRecord:
        """Store a request.

        Args:
            url: The requested URL
            request_date: ISO-8601 timestamp. Defaults to now (UTC).

        Returns:
            The stored record with its assigned id
        """
        pass

    @abstractmethod
    def get_requests_by_url(self, url: str) -> List[RequestRecord]:
        """Retrieve all requests for a URL, oldest first."""
        pass

    @abstractmethod
    def get_all_requests(self) -> List[RequestRecord]:
        """Retrieve every stored request, oldest first."""
        pass

    def close(self) -> None:
        """Release any held resources."""


class InMemoryRequestLog(AbstractRequestLog):
    """Process-local request log."""

    def __init__(self):
        self._requests: dict[int, RequestRecord] = {}
        self._current_id = 1
        self._lock = threading.Lock()

    def record(self, url: str, request_date: Optional[str] = None) -> RequestRecord:
        with self._lock:
            request = RequestRecord(
                id=self._current_id,
                url=url,
                request_date=request_date or utc_now_iso(),
            )
            self._requests[request.id] = request
            self._current_id += 1
        return request

    def get_requests_by_url(self, url: str) -> List[RequestRecord]:
        return [r for r in self.get_all_requests() if r.url == url]

    def get_all_requests(self) -> List[RequestRecord]:
        with self._lock:
            return list(self._requests.values())


class NullRequestLog(AbstractRequestLog):
    """Request log that stores nothing."""

    def record(self, url: str, request_date: Optional[str] = None) -> RequestRecord:
        return RequestRecord(id=0, url=url, request_date=request_date or utc_now_iso())

    def get_requests_by_url(self, url: str) -> List[RequestRecord]:
        return []

    def get_all_requests(self) -> List[RequestRecord]:
        return []


class SqliteRequestLog(AbstractRequestLog):
    """SQLite request log for local storage."""

    def __init__(self, db_url: Optional[str] = None):
        """Initialize the SQLite request log.

        Args:
            db_url: Database URL (sqlite:///path/to/db.db). Defaults to settings.REQUEST_LOG_URL.
        """
        self.db_url = db_url or settings.REQUEST_LOG_URL
        self.db_path = self.db_url.replace("sqlite:///", "")
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self.connect()
        self.create_schema()

    def connect(self) -> None:
        """Establish SQLite connection."""
        # Writes may arrive from the background logging thread
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        logger.debug(f"Connected to request log database: {self.db_path}")

    def close(self) -> None:
        """Close SQLite connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Closed request log database")

    def create_schema(self) -> None:
        """Create the requests table if it doesn't exist."""
        with self.conn:
            self.conn.execute(CREATE_TABLE_SQL)

    def record(self, url: str, request_date: Optional[str] = None) -> RequestRecord:
        request_date = request_date or utc_now_iso()
        with self._lock, self.conn:
            cursor = self.conn.execute(
                "INSERT INTO seo_requests (url, request_date) VALUES (?, ?)",
                (url, request_date),
            )
        logger.debug(f"Logged request for {url}")
        return RequestRecord(id=cursor.lastrowid, url=url, request_date=request_date)

    def get_requests_by_url(self, url: str) -> List[RequestRecord]:
        return self._query("SELECT * FROM seo_requests WHERE url = ? ORDER BY id ASC", (url,))

    def get_all_requests(self) -> List[RequestRecord]:
        return self._query("SELECT * FROM seo_requests ORDER BY id ASC", ())

    def _query(self, sql: str, params: tuple) -> List[RequestRecord]:
        with self._lock:
            rows = self.conn.execute(sql, params).fetchall()
        return [
            RequestRecord(id=row['id'], url=row['url'], request_date=row['request_date'])
            for row in rows
        ]


class BackgroundRequestLogger:
    """Fire-and-forget wrapper that writes to a request log on a worker thread.

    Failures are logged and never propagate to the caller.
    """

    def __init__(self, request_log: AbstractRequestLog):
        self.request_log = request_log
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="request-log")

    def submit(self, url: str, request_date: Optional[str] = None) -> Optional[Future]:
        """Queue a request record; returns the pending future, or None if queuing failed."""
        request_date = request_date or utc_now_iso()
        try:
            future = self._executor.submit(self.request_log.record, url, request_date)
        except RuntimeError as e:
            logger.warning(f"Request log unavailable, dropping entry for {url}: {e}")
            return None
        future.add_done_callback(self._report_failure)
        return future

    @staticmethod
    def _report_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.warning(f"Failed to log request: {error}")

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker, optionally waiting for queued writes."""
        self._executor.shutdown(wait=wait)


def get_request_log(backend: Optional[str] = None, **kwargs) -> AbstractRequestLog:
    """Factory function to create the configured request log.

    Args:
        backend: 'memory', 'sqlite' or 'none'. Defaults to settings.REQUEST_LOG_BACKEND.
        **kwargs: Additional arguments passed to the backend constructor.

    Returns:
        An AbstractRequestLog implementation

    Raises:
        ValueError: If an unknown backend is specified.
    """
    backend = backend or settings.REQUEST_LOG_BACKEND

    if backend == "memory":
        logger.debug("Using in-memory request log")
        return InMemoryRequestLog()
    elif backend == "sqlite":
        logger.debug("Using SQLite request log")
        return SqliteRequestLog(**kwargs)
    elif backend == "none":
        return NullRequestLog()
    else:
        raise ValueError(
            f"Unknown request log backend: '{backend}'. "
            "Supported backends: 'memory', 'sqlite', 'none'"
        )
