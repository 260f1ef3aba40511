"""
Database seeding commands.

    python seed.py admin                  create the admin account
    python seed.py data                   create the sample owner and listings
    python seed.py reset-admin-password   restore the configured admin password
    python seed.py approve-all            publish every pending property
"""

import argparse
import logging
import sys

from database.data_source import SqlDataSource
from database.fixtures import ensure_admin, reset_admin_password, seed_sample_properties
from database.init import Base, SessionLocal, engine
from services.property_service import PropertyService
from utils.logger import configure_logging

logger = logging.getLogger("seed")


def run(command: str) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        data_source = SqlDataSource(db)
        if command == "admin":
            ensure_admin(data_source)
        elif command == "data":
            seed_sample_properties(data_source)
        elif command == "reset-admin-password":
            if not reset_admin_password(data_source):
                return 1
        elif command == "approve-all":
            result = PropertyService().approve_all_pending(data_source)
            logger.info("Updated %s properties", result.modified)
        return 0
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        SessionLocal.remove()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the house rent database")
    parser.add_argument(
        "command", choices=["admin", "data", "reset-admin-password", "approve-all"]
    )
    args = parser.parse_args(argv)
    configure_logging()
    return run(args.command)


if __name__ == "__main__":
    sys.exit(main())
