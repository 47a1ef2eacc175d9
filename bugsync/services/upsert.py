# bugsync/services/upsert.py
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from bugsync.core.errors import ConfigurationError


def upsert(db: Session, model, key: str, values: dict) -> None:
    """Insert a row or update it in place when `key` already exists.

    Issued as a single INSERT ... ON CONFLICT statement so concurrent writers
    to the same key are serialized by the database.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        insert = postgresql.insert
    elif dialect == "sqlite":
        insert = sqlite.insert
    else:
        raise ConfigurationError(f"Unsupported database for upserts: {dialect} (use SQLite or PostgreSQL)")

    stmt = insert(model).values(**values)
    updates = {name: stmt.excluded[name] for name in values if name != key}
    stmt = stmt.on_conflict_do_update(index_elements=[key], set_=updates)
    db.execute(stmt)
    db.commit()
    # ORM rows already loaded in this session would otherwise keep old values
    db.expire_all()
