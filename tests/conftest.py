"""
Shared pytest fixtures for the PoolCare backend test suite.

Each test gets a fresh app bound to its own in-memory SQLite database.
"""
from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from app import create_app, db
from app.models import (
    Organization, User, Carer, Client, Pool, VisitTemplate, ServicePlan,
    Job, VisitEntry, Reading, ChemicalsUsed, Issue, UserRole
)

# Mid-day UTC, far from any midnight boundary
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
NOW_NAIVE = NOW.replace(tzinfo=None)
NOW_MS = int(NOW.timestamp() * 1000)


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


class Factory:
    """Creates records with sensible defaults; every call commits."""

    def __init__(self):
        self._seq = 0

    def _next(self):
        self._seq += 1
        return self._seq

    def _save(self, obj):
        db.session.add(obj)
        db.session.commit()
        return obj

    def org(self, **kwargs):
        n = self._next()
        kwargs.setdefault('name', f'Org {n}')
        kwargs.setdefault('slug', f'org-{n}')
        return self._save(Organization(**kwargs))

    def user(self, org, role=UserRole.MANAGER.value, password=None, **kwargs):
        n = self._next()
        kwargs.setdefault('email', f'user{n}@example.com')
        kwargs.setdefault('name', f'User {n}')
        user = User(org_id=org.id, role=role, **kwargs)
        if password:
            user.set_password(password)
        return self._save(user)

    def carer(self, org, user=None, **kwargs):
        kwargs.setdefault('name', user.name if user else f'Carer {self._next()}')
        return self._save(Carer(org_id=org.id, user_id=user.id if user else None, **kwargs))

    def pool(self, org, **kwargs):
        n = self._next()
        client = self._save(Client(org_id=org.id, name=f'Client {n}'))
        kwargs.setdefault('name', f'Pool {n}')
        kwargs.setdefault('address', f'{n} Oak Street')
        kwargs.setdefault('volume_l', 20000)
        kwargs.setdefault('targets', {'ph': [7.2, 7.6]})
        return self._save(Pool(org_id=org.id, client_id=client.id, **kwargs))

    def plan(self, org, pool):
        template = self._save(VisitTemplate(org_id=org.id, name='Weekly Maintenance'))
        return self._save(ServicePlan(
            org_id=org.id, pool_id=pool.id, visit_template_id=template.id,
            window_start='09:00:00', window_end='11:00:00',
        ))

    def job(self, org, pool=None, carer=None, plan=None, start=None, **kwargs):
        start = start or NOW_NAIVE
        return self._save(Job(
            org_id=org.id,
            pool_id=pool.id if pool else None,
            plan_id=plan.id if plan else None,
            assigned_carer_id=carer.id if carer else None,
            window_start=start,
            window_end=start + timedelta(hours=2),
            **kwargs
        ))

    def visit(self, org, job, **kwargs):
        return self._save(VisitEntry(org_id=org.id, job_id=job.id, **kwargs))

    def reading(self, org, visit, **kwargs):
        kwargs.setdefault('ph', 7.4)
        return self._save(Reading(org_id=org.id, visit_id=visit.id, **kwargs))

    def chemical(self, org, visit, **kwargs):
        kwargs.setdefault('chemical', 'Liquid chlorine')
        return self._save(ChemicalsUsed(org_id=org.id, visit_id=visit.id, **kwargs))

    def issue(self, org, visit=None, pool=None, **kwargs):
        kwargs.setdefault('type', 'equipment')
        kwargs.setdefault('description', 'Pump is noisy')
        return self._save(Issue(
            org_id=org.id,
            visit_id=visit.id if visit else None,
            pool_id=pool.id if pool else None,
            **kwargs
        ))


@pytest.fixture
def factory(app):
    return Factory()


@pytest.fixture
def auth_headers(app):
    """Builds Bearer headers for a user; claims can be overridden."""
    def _headers(user, **claims):
        additional_claims = {'org_id': user.org_id, 'role': user.role}
        additional_claims.update(claims)
        token = create_access_token(identity=user.id, additional_claims=additional_claims)
        return {'Authorization': f'Bearer {token}'}
    return _headers
