"""
Per-patient advisory locking for multi-step prescription writes.

Creating or discontinuing a medication reads the patient's active medications
and then writes the medication, its schedule and any alerts. Those steps are
serialized per patient so two concurrent prescriptions cannot miss each other
during interaction checking.

Every process keeps an in-process lock registry. On PostgreSQL a session-level
advisory lock is additionally held on a dedicated connection, which covers
multiple API workers and survives the commits made inside the block.
"""
import hashlib
import logging
import threading
from contextlib import contextmanager
from typing import Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import InfrastructureException

# Set up logging
logger = logging.getLogger(__name__)

_registry_guard = threading.Lock()
_patient_locks: Dict[str, threading.Lock] = {}


def _local_lock_for(patient_id: str) -> threading.Lock:
    with _registry_guard:
        lock = _patient_locks.get(patient_id)
        if lock is None:
            lock = threading.Lock()
            _patient_locks[patient_id] = lock
        return lock


def advisory_key(patient_id: str) -> int:
    """Map a patient id onto the signed 64-bit key space of pg advisory locks."""
    digest = hashlib.sha256(patient_id.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


@contextmanager
def _advisory_lock(db: Session, patient_id: str, timeout: float):
    """
    Hold a PostgreSQL advisory lock for the patient on its own connection.

    The lock is session-level, so commits made through `db` inside the block
    do not release it.
    """
    key = advisory_key(patient_id)
    connection = db.get_bind().connect()
    try:
        try:
            connection.execute(
                text("SELECT set_config('lock_timeout', :timeout, false)"),
                {"timeout": f"{int(timeout * 1000)}ms"},
            )
            connection.execute(text("SELECT pg_advisory_lock(:key)"), {"key": key})
        except SQLAlchemyError as e:
            logger.error(f"Could not take advisory lock for patient {patient_id}: {str(e)}")
            raise InfrastructureException("Timed out waiting for patient lock") from e
        try:
            yield
        finally:
            connection.execute(text("SELECT pg_advisory_unlock(:key)"), {"key": key})
    finally:
        connection.close()


@contextmanager
def patient_lock(db: Session, patient_id: str):
    """
    Hold the write lock for one patient for the duration of the block.

    Args:
        db: Database session the guarded writes will use
        patient_id: Patient whose medication list is being changed

    Raises:
        InfrastructureException: If the lock cannot be acquired in time
    """
    timeout = settings.lock_timeout_seconds
    local_lock = _local_lock_for(patient_id)
    if not local_lock.acquire(timeout=timeout):
        logger.error(f"Timed out after {timeout}s waiting for lock on patient {patient_id}")
        raise InfrastructureException("Timed out waiting for patient lock")
    try:
        if db.get_bind().dialect.name == "postgresql":
            with _advisory_lock(db, patient_id, timeout):
                yield
        else:
            yield
    finally:
        local_lock.release()
