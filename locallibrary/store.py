"""
Persistence for the catalog handlers.

``CatalogStore`` is the only thing handlers use to read and write records. It
wraps the Flask-SQLAlchemy session behind a small set of operations (get by id,
find with filter and sort, count, create, update by id, delete by id) and can
load referenced records inline (``populate``). One store is created per app and
passed into the handlers.
"""

import logging

from sqlalchemy.orm import selectinload

logger = logging.getLogger(__name__)


# SQLite INTEGER is a signed 64-bit value
MAX_ID = 2**63 - 1


def coerce_id(value):
    """Turn a path or form identifier into an int, or ``None`` if it can't be one."""
    if isinstance(value, bool):
        return None
    try:
        ident = int(value)
    except (TypeError, ValueError):
        return None
    if not -MAX_ID - 1 <= ident <= MAX_ID:
        return None
    return ident


class CatalogStore:
    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def _load_options(self, model, populate):
        return [selectinload(getattr(model, name)) for name in populate]

    def get(self, model, ident, populate=()):
        ident = coerce_id(ident)
        if ident is None:
            return None
        return self.session.get(model, ident, options=self._load_options(model, populate))

    def find(self, model, *criteria, sort=(), populate=()):
        query = self.db.select(model).where(*criteria).order_by(*sort)
        options = self._load_options(model, populate)
        if options:
            query = query.options(*options)
        return list(self.session.scalars(query))

    def first(self, model, *criteria, sort=()):
        query = self.db.select(model).where(*criteria).order_by(*sort).limit(1)
        return self.session.scalars(query).first()

    def count(self, model, *criteria):
        query = self.db.select(self.db.func.count()).select_from(model).where(*criteria)
        return self.session.scalar(query)

    def create(self, record):
        self.session.add(record)
        self.session.commit()
        logger.debug(f"Created {record!r}")
        return record

    def update(self, model, ident, values):
        """Overwrite the given fields of a stored record. Returns ``None`` if it doesn't exist."""
        record = self.get(model, ident)
        if record is None:
            return None
        for name, value in values.items():
            setattr(record, name, value)
        self.session.commit()
        logger.debug(f"Updated {record!r}")
        return record

    def delete(self, model, ident):
        record = self.get(model, ident)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        logger.debug(f"Deleted {record!r}")
        return True
