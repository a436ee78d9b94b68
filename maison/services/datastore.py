"""
Table-oriented data access over the SQLAlchemy session.

Every service talks to the database through a ``Repository`` bound to one
model, so tests can hand a service a repository (or a stand-in) that fails
on purpose.
"""
import logging

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceError
from ..extensions import db

logger = logging.getLogger(__name__)


def pagination_dict(page):
    """``{page, limit, total, totalPages}`` for a Flask-SQLAlchemy pagination."""
    return {
        'page': page.page,
        'limit': page.per_page,
        'total': page.total,
        'totalPages': page.pages,
    }


def like_pattern(term):
    """Substring pattern with ``%``, ``_`` and the escape character matched literally."""
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


class Repository:
    def __init__(self, model, session=None):
        self.model = model
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def query(self):
        return self.session.query(self.model)

    def _filtered(self, filters=None, search=None, search_columns=()):
        query = self.query()
        for name, value in (filters or {}).items():
            column = getattr(self.model, name)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)
        if search and search_columns:
            pattern = like_pattern(search)
            columns = [getattr(self.model, c) for c in search_columns]
            query = query.filter(or_(*[column.ilike(pattern, escape='\\') for column in columns]))
        return query

    def get(self, id_):
        if not id_:
            return None
        return self.session.get(self.model, id_)

    def find_one(self, **filters):
        return self._filtered(filters).first()

    def select(self, filters=None, order_by=None, limit=None, search=None, search_columns=()):
        query = self._filtered(filters, search, search_columns)
        if order_by is not None:
            query = query.order_by(*order_by) if isinstance(order_by, (list, tuple)) else query.order_by(order_by)
        if limit:
            query = query.limit(limit)
        return query.all()

    def paginate(self, page=1, limit=20, filters=None, order_by=None, search=None, search_columns=()):
        query = self._filtered(filters, search, search_columns)
        if order_by is not None:
            query = query.order_by(*order_by) if isinstance(order_by, (list, tuple)) else query.order_by(order_by)
        return query.paginate(page=page, per_page=limit, error_out=False)

    def count(self, **filters):
        return self._filtered(filters).count()

    def insert(self, commit=True, **values):
        obj = self.model(**values)
        self.session.add(obj)
        self._write(commit)
        return obj

    def insert_many(self, rows, commit=True):
        objs = [self.model(**row) for row in rows]
        self.session.add_all(objs)
        self._write(commit)
        return objs

    def save(self, obj, commit=True):
        self.session.add(obj)
        self._write(commit)
        return obj

    def update(self, obj, commit=True, **values):
        for name, value in values.items():
            setattr(obj, name, value)
        self._write(commit)
        return obj

    def delete(self, obj, commit=True):
        self.session.delete(obj)
        self._write(commit)

    def delete_where(self, commit=True, **filters):
        deleted = self._filtered(filters).delete(synchronize_session=False)
        self._write(commit)
        return deleted

    def _write(self, commit):
        try:
            if commit:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error('Write to %s failed: %s', self.model.__tablename__, e)
            raise PersistenceError(f'Failed to write {self.model.__tablename__}') from e
