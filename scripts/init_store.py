#!/usr/bin/env python
"""
Create (or reset) the Cinefile storage database.

Usage:
    python scripts/init_store.py [--db-path data/cinefile.db] [--reset]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cinefile.config import get_database_path
from cinefile.storage.init_db import init_store, verify_schema
from cinefile.utils.logging_config import configure_script_logging


def main():
    parser = argparse.ArgumentParser(description="Initialize Cinefile storage")
    parser.add_argument("--db-path", default=get_database_path(), help="SQLite database file")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first (deletes data!)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_script_logging(debug=args.debug)

    db_manager = init_store(args.db_path, reset=args.reset)
    ok = verify_schema(db_manager)
    db_manager.close()

    if ok:
        print(f"\n✅ Storage initialized at {args.db_path}")
        return 0
    print("\n❌ Storage initialization failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
