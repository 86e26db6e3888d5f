# infra/db/base.py
from __future__ import annotations
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(db_url: str, *, echo: bool = False) -> Engine:
    logger.info("Using task database at: %s", db_url)
    return create_engine(db_url, echo=echo, future=True)
