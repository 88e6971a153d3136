#!/usr/bin/env python3
"""
Apply versioned schema migrations to the sports store database.

  # Apply everything pending (database from DATABASE_URL / DB_* settings)
  python -m sports_store.scripts.migrate

  # Show applied and pending migrations without changing anything
  python -m sports_store.scripts.migrate --status

  # Stop after a given version
  python -m sports_store.scripts.migrate --target 2

  # Explicit database
  python -m sports_store.scripts.migrate --database-url mysql+pymysql://root:@localhost:3306/sports_store
"""

import argparse
import logging
import sys
from typing import List, Optional

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def print_status(engine) -> None:
    from sports_store.core.migrations import MIGRATIONS, pending_migrations

    pending = {m.version for m in pending_migrations(engine)}
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")
    for migration in MIGRATIONS:
        state = "pending" if migration.version in pending else "applied"
        print(f"  [{state:>7}] {migration.label}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Apply sports store schema migrations")
    parser.add_argument("--database-url", type=str, default=None, help="SQLAlchemy URL (defaults to settings)")
    parser.add_argument("--target", type=int, default=None, help="Highest migration version to apply")
    parser.add_argument("--status", action="store_true", help="List applied/pending migrations and exit")
    args = parser.parse_args(argv)

    from sports_store.core.config import settings
    from sports_store.core.database import create_db_engine, mask_database_url
    from sports_store.core.migrations import apply_migrations

    database_url = args.database_url or settings.database_url
    engine = create_db_engine(database_url)
    try:
        if args.status:
            print_status(engine)
            return 0

        logger.info(f"🔧 Migrating {mask_database_url(database_url)}")
        applied = apply_migrations(engine, target=args.target)
        if applied:
            logger.info(f"✅ Applied {len(applied)} migration(s): {applied}")
        else:
            logger.info("✅ Nothing to apply, schema is up to date")
        return 0
    except Exception as e:
        logger.exception(f"❌ Migration failed: {e}")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
