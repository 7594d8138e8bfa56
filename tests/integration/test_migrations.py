import sqlite3

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")

def test_migrator_creates_migration_table(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    migrator.run_migrations()

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='_migrations'"
    )
    assert cursor.fetchone() is not None
    conn.close()

def test_migrator_applies_initial(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    applied = migrator.run_migrations()

    assert applied == ["0001_posts_and_meta.sql"]

    conn = sqlite3.connect(temp_db_path)
    for table in ("posts", "post_meta"):
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
        )
        assert cursor.fetchone() is not None

    cursor = conn.execute(
        "SELECT filename FROM _migrations WHERE filename='0001_posts_and_meta.sql'"
    )
    assert cursor.fetchone() is not None
    conn.close()

def test_migrator_is_idempotent(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)

    # Run twice
    migrator.run_migrations()
    assert migrator.run_migrations() == []

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute("SELECT count(*) FROM _migrations")
    assert cursor.fetchone()[0] == 1
    conn.close()

def test_down_section_is_not_applied(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "0001_example.sql").write_text(
        "CREATE TABLE example (id INTEGER PRIMARY KEY);\n"
        "-- Down\n"
        "DROP TABLE example;\n"
    )

    SQLiteMigrator(temp_db_path, str(migrations)).run_migrations()

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE name='example'")
    assert cursor.fetchone() is not None
    conn.close()

def test_failed_migration_raises(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "0001_broken.sql").write_text("CREATE TABLE (;")

    with pytest.raises(RuntimeError, match="0001_broken.sql"):
        SQLiteMigrator(temp_db_path, str(migrations)).run_migrations()

def test_pending_lists_unapplied_files(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)

    assert migrator.pending() == ["0001_posts_and_meta.sql"]
    migrator.run_migrations()
    assert migrator.pending() == []
