"""Unit tests for the RatingRecord model and table creation helper."""

from sqlalchemy import inspect

from create_tables import create_tables
from site_ratings.models.sql import RatingRecord, build_session_factory


def test_create_tables_on_sqlite(tmp_path):
    engine = create_tables(database_url=f"sqlite:///{tmp_path / 'ratings.db'}")

    assert "ratings" in inspect(engine).get_table_names()
    columns = {column["name"] for column in inspect(engine).get_columns("ratings")}
    assert columns == {"id", "rating", "comment", "created_at"}
    engine.dispose()


def test_defaults_assigned_on_insert(tmp_path):
    engine = create_tables(database_url=f"sqlite:///{tmp_path / 'ratings.db'}")
    session = build_session_factory(engine)()
    try:
        record = RatingRecord(rating=5)
        session.add(record)
        session.commit()

        row = record.to_dict()
    finally:
        session.close()
        engine.dispose()

    assert len(row["id"]) == 36
    assert row["rating"] == 5
    assert row["comment"] is None
    assert row["created_at"] is not None
