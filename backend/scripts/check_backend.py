#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from backend/:
  python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing. Copy from backend/.env.example (defaults will be used).")
    else:
        print("OK  .env exists")

    # 2) DB connection and tables
    try:
        from sqlalchemy import inspect, text

        from newsdesk.db.session import engine
        from newsdesk.db.tables import ALL_TABLE_NAMES

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("OK  Database connection (DATABASE_URL)")
        missing = set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names())
        if missing:
            print(f"WARN Missing tables {sorted(missing)}; run: alembic upgrade head (or they are created on startup)")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 3) Twitter credentials
    from newsdesk.services.twitter.config import TwitterConfig

    if TwitterConfig().is_configured():
        print("OK  Twitter credentials configured")
    else:
        print("WARN TWITTER_BEARER_TOKEN not set; /refresh will serve cached or mock tweets")

    # 4) App import (catches missing deps, bad imports)
    try:
        from newsdesk.main import app  # noqa: F401

        print("OK  App import (newsdesk.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\nFix the above, then run:")
        print("  cd backend && uvicorn newsdesk.main:app --reload --host 0.0.0.0 --port 8000")
        return 1
    print("\nAll checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
