"""
Cooldown stores: in-memory (one process) and SQL (shared by all instances).

Both keep last_refresh monotonic: a write older than the stored value is ignored,
so a slow instance finishing late cannot move the timer backwards.
"""
import logging
import threading

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from newsdesk.models.refresh_state import RefreshState

logger = logging.getLogger(__name__)


class InMemoryCooldownStore:
    """Process-local store. Use COOLDOWN_BACKEND=memory for a single worker or tests."""

    def __init__(self) -> None:
        self._last: dict[str, int] = {}
        self._lock = threading.Lock()

    def get_last_refresh(self, source: str) -> int | None:
        with self._lock:
            return self._last.get(source)

    def record_refresh(self, source: str, epoch: int, *, outcome: str, error: str | None = None) -> int:
        with self._lock:
            current = self._last.get(source)
            if current is None or epoch > current:
                self._last[source] = epoch
                current = epoch
            return current

    def reset(self, source: str) -> None:
        with self._lock:
            self._last.pop(source, None)


class SqlCooldownStore:
    """refresh_state table; one short session per call."""

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def get_last_refresh(self, source: str) -> int | None:
        db = self._session_factory()
        try:
            row = db.query(RefreshState).filter(RefreshState.source == source).first()
            return row.last_refresh_epoch if row else None
        finally:
            db.close()

    def record_refresh(self, source: str, epoch: int, *, outcome: str, error: str | None = None) -> int:
        db = self._session_factory()
        try:
            for attempt in range(2):
                row = db.query(RefreshState).filter(RefreshState.source == source).first()
                if row is None:
                    db.add(RefreshState(source=source, last_refresh_epoch=epoch, last_outcome=outcome, last_error=error))
                    try:
                        db.commit()
                        return epoch
                    except IntegrityError:
                        # Another instance inserted the row first; retry as an update
                        db.rollback()
                        logger.debug("refresh_state insert race for %s (attempt %s)", source, attempt)
                        continue
                if row.last_refresh_epoch is None or epoch > row.last_refresh_epoch:
                    row.last_refresh_epoch = epoch
                row.last_outcome = outcome
                row.last_error = error
                db.commit()
                return row.last_refresh_epoch
            raise RuntimeError(f"Could not record refresh for {source}")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def reset(self, source: str) -> None:
        db = self._session_factory()
        try:
            db.execute(delete(RefreshState).where(RefreshState.source == source))
            db.commit()
        finally:
            db.close()
