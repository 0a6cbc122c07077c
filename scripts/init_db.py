#!/usr/bin/env python3
"""
Create the MoovSafe tables (vehicles, inspections, maintenance_history).
Existing tables are left untouched.
"""
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from sqlalchemy.exc import SQLAlchemyError

from moovsafe.core.database import Base, engine
import moovsafe.models  # noqa: F401  registers the tables on Base

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_db():
    try:
        for table in Base.metadata.sorted_tables:
            table.create(engine, checkfirst=True)
            logger.info(f"Table {table.name} ready")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise


if __name__ == "__main__":
    init_db()
