# services/base.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from utils.errors import ConflictError

logger = logging.getLogger(__name__)


class BaseService:
    """Shares the request session and the single-commit helpers."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _write_guard(self):
        # Version mismatches and unique races surface on flush or commit
        try:
            yield
        except StaleDataError:
            self.db.rollback()
            logger.warning("Concurrent modification detected, transaction rolled back")
            raise ConflictError("The record was modified by another request, please retry")
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Integrity violation: %s", exc.orig)
            raise ConflictError("The change conflicts with existing data")

    def _flush(self):
        with self._write_guard():
            self.db.flush()

    def _commit(self):
        with self._write_guard():
            self.db.commit()
