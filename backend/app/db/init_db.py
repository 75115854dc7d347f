"""
Database initialization script.

Usage (from the backend directory):
    python -m app.db.init_db [--seed]
"""
import sys
import logging
from app.core.logging import setup_logging
from app.db.session import SessionLocal, init_db
from app.db.seed import seed_reference_data

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    setup_logging()
    logger.info("Initializing database...")
    init_db()
    if "--seed" in sys.argv:
        db = SessionLocal()
        try:
            seed_reference_data(db)
        finally:
            db.close()
    logger.info("Database initialized successfully!")
