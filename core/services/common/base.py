from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ServiceBase:
    """Unit-of-work helper for services that write through a repository."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def commit(self) -> None:
        if self._session is None:
            return
        try:
            self._session.commit()
        except Exception:
            logger.exception("Commit failed; rolling back")
            self._session.rollback()
            raise
