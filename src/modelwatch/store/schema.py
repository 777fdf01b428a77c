"""Database schema definitions for modelwatch."""

SCHEMA_VERSION = 1

SCHEMA_SQL = """\
-- Key-value snapshots, one row per source (key: models_<source_id>)
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def get_schema() -> str:
    """Return the schema script."""
    return SCHEMA_SQL
