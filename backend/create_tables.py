#!/usr/bin/env python3
"""
Create the ratings table from the SQLAlchemy model.
Development helper; hosted deployments manage their own schema.
"""

import argparse
import os
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import inspect

from site_ratings.models.sql import Base, RatingRecord, build_engine  # noqa: F401


def create_tables(database_url=None, drop_existing=False):
    """Create all tables from SQLAlchemy models"""
    engine = build_engine(database_url)
    print(f"Connecting to database: {engine.url.render_as_string(hide_password=True)}")

    if drop_existing:
        print("Dropping existing tables...")
        Base.metadata.drop_all(engine)
        print("✓ Tables dropped")

    print("Creating tables from models...")
    Base.metadata.create_all(engine)
    print("✓ Tables created")

    for table_name in inspect(engine).get_table_names():
        print(f"  - {table_name}")

    return engine


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the ratings database tables")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL"))
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    create_tables(database_url=args.database_url, drop_existing=args.drop)
