from trackl.config import Settings


def test_get_engine_kwargs_sqlite_has_check_same_thread():
    from trackl.database import database as db

    kwargs = db.get_engine_kwargs(Settings(database_url="sqlite:///./trackl.db"))
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_has_conservative_pooling():
    from trackl.database import database as db

    settings = Settings(
        database_url="postgresql+psycopg://u:p@localhost:5432/db",
        db_pool_size=5,
        db_max_overflow=5,
        db_pool_timeout_sec=30,
    )

    kwargs = db.get_engine_kwargs(settings)
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 5
    assert kwargs["max_overflow"] == 5
    assert kwargs["pool_timeout"] == 30


def test_echo_follows_debug():
    from trackl.database import database as db

    assert db.get_engine_kwargs(Settings(debug=True))["echo"] is True
    assert db.get_engine_kwargs(Settings())["echo"] is False


def test_sqlite_url_detection():
    from trackl.database import database as db

    assert db._is_sqlite_url("sqlite:///./trackl.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_init_db_creates_tables_for_sqlite(tmp_path):
    """A fresh SQLite file gets the tasks and events tables."""
    from sqlalchemy import inspect
    from trackl.database import database as db

    settings = Settings(database_url=f"sqlite:///{tmp_path / 'fresh.db'}")
    engine = db.build_engine(settings)
    try:
        db.init_db(engine, settings)
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert {"tasks", "events"} <= tables


def test_sqlite_pragmas_enable_foreign_keys(tmp_path):
    from sqlalchemy import text
    from trackl.database import database as db

    settings = Settings(database_url=f"sqlite:///{tmp_path / 'pragmas.db'}")
    engine = db.build_engine(settings)
    try:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
    finally:
        engine.dispose()
