"""Tenant-scoped access to the record store.

Every read issued on behalf of an organization goes through a TenantScope,
so a query without the ``org_id`` filter cannot be built from service code.
"""
from app import db
from app.models import Organization


class TenantScopeError(ValueError):
    """Raised when a scope is misused (no org id, or a model without org_id)."""


class TenantScope:
    """Read accessor bound to a single organization."""

    def __init__(self, org_id):
        if not org_id:
            raise TenantScopeError('TenantScope requires an org_id')
        self.org_id = org_id

    def _org_column(self, model):
        column = getattr(model, 'org_id', None)
        if column is None:
            raise TenantScopeError(f'{model.__name__} is not tenant-owned (no org_id column)')
        return column

    def organization(self):
        """The scope's own Organization row, or None."""
        return db.session.get(Organization, self.org_id)

    def query(self, model):
        """Base query for ``model`` already filtered on the scope's org_id."""
        return model.query.filter(self._org_column(model) == self.org_id)

    def first(self, model, **filters):
        """First row of ``model`` matching ``filters`` in this organization, or None."""
        return self.query(model).filter_by(**filters).first()

    def where_in(self, model, column_name, ids, options=None, order_by=None):
        """
        Rows of ``model`` whose ``column_name`` is in ``ids``.

        Falsy ids are dropped. An empty id set returns [] without
        touching the database: an empty IN clause is never emitted.
        """
        ids = list(dict.fromkeys(i for i in ids if i))
        if not ids:
            return []

        query = self.query(model).filter(getattr(model, column_name).in_(ids))
        if options:
            query = query.options(*options)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()
