"""HTTP contract of GET /api/mobile/sync."""
import pytest

from app.models import UserRole
from app.services import sync_service
from tests.conftest import NOW, NOW_MS

SYNC_URL = '/api/mobile/sync'


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch):
    monkeypatch.setattr(sync_service, 'current_time', lambda: NOW)


@pytest.fixture
def manager_org(factory):
    """Org with two of today's jobs (one with a pool), three visits and two readings."""
    org = factory.org()
    manager = factory.user(org, role=UserRole.MANAGER.value)
    pool = factory.pool(org)
    with_pool = factory.job(org, pool=pool)
    without_pool = factory.job(org)
    first = factory.visit(org, with_pool)
    factory.visit(org, with_pool)
    factory.visit(org, without_pool)
    factory.reading(org, first)
    factory.reading(org, first)
    return org, manager


def test_requires_token(client):
    response = client.get(SYNC_URL)

    assert response.status_code == 401
    assert response.get_json()['code'] == 'TOKEN_MISSING'


def test_rejects_garbage_token(client):
    response = client.get(SYNC_URL, headers={'Authorization': 'Bearer not-a-jwt'})

    assert response.status_code == 401
    assert response.get_json()['code'] == 'TOKEN_INVALID'


def test_rejects_token_without_org(client, factory, auth_headers):
    org = factory.org()
    manager = factory.user(org)

    response = client.get(SYNC_URL, headers=auth_headers(manager, org_id=None))

    assert response.status_code == 401


def test_rejects_cross_tenant_token(client, factory, auth_headers):
    org = factory.org()
    other = factory.org()
    manager = factory.user(org)

    response = client.get(SYNC_URL, headers=auth_headers(manager, org_id=other.id))

    assert response.status_code == 403


def test_rejects_inactive_user(client, factory, auth_headers):
    org = factory.org()
    manager = factory.user(org, is_active=False)

    response = client.get(SYNC_URL, headers=auth_headers(manager))

    assert response.status_code == 403
    assert response.get_json()['code'] == 'ACCOUNT_DISABLED'


def test_client_role_is_refused(client, factory, auth_headers):
    org = factory.org()
    customer = factory.user(org, role=UserRole.CLIENT.value)

    response = client.get(SYNC_URL, headers=auth_headers(customer))

    assert response.status_code == 403
    assert response.get_json()['code'] == 'INSUFFICIENT_ROLE'


def test_default_shapes(client, manager_org, auth_headers):
    _, manager = manager_org

    response = client.get(SYNC_URL, headers=auth_headers(manager))

    assert response.status_code == 200
    body = response.get_json()
    assert body['serverTs'] == NOW_MS
    assert len(body['jobs']) == 2
    assert len(body['pools']) == 1
    assert len(body['visits']) == 3
    for shape in ('readings', 'chemicals', 'issues', 'vanStock', 'tombstones'):
        assert body[shape] == []


def test_example_snapshot(client, manager_org, auth_headers):
    _, manager = manager_org

    response = client.get(
        SYNC_URL,
        query_string={'since': '0', 'shapes': 'jobs,pools,visits,readings'},
        headers=auth_headers(manager),
    )

    body = response.get_json()
    assert (len(body['jobs']), len(body['pools']), len(body['visits']), len(body['readings'])) == (2, 1, 3, 2)
    assert body['tombstones'] == []


def test_since_does_not_change_jobs(client, manager_org, auth_headers):
    _, manager = manager_org
    ten_days_ago = NOW_MS - 10 * 86400000

    full = client.get(SYNC_URL, headers=auth_headers(manager)).get_json()
    delta = client.get(SYNC_URL, query_string={'since': ten_days_ago}, headers=auth_headers(manager)).get_json()

    assert delta['jobs'] == full['jobs']


def test_invalid_since_and_unknown_shapes_are_tolerated(client, manager_org, auth_headers):
    _, manager = manager_org

    response = client.get(
        SYNC_URL,
        query_string={'since': 'yesterday', 'shapes': 'jobs,invoices'},
        headers=auth_headers(manager),
    )

    assert response.status_code == 200
    body = response.get_json()
    assert len(body['jobs']) == 2
    assert body['pools'] == []
    assert body['visits'] == []


def test_org_comes_from_token_not_query(client, manager_org, factory, auth_headers):
    _, manager = manager_org
    other = factory.org()
    factory.job(other)

    response = client.get(SYNC_URL, query_string={'orgId': other.id}, headers=auth_headers(manager))

    assert {j['orgId'] for j in response.get_json()['jobs']} == {manager.org_id}


def test_carer_snapshot(client, factory, auth_headers):
    org = factory.org()
    user = factory.user(org, role=UserRole.CARER.value)
    me = factory.carer(org, user)
    pool = factory.pool(org)
    job = factory.job(org, pool=pool, carer=me, plan=factory.plan(org, pool))
    visit = factory.visit(org, job)
    factory.issue(org, visit=visit, pool=pool)
    factory.job(org, pool=factory.pool(org), carer=factory.carer(org))

    response = client.get(
        SYNC_URL,
        query_string={'shapes': 'jobs,pools,visits,issues,vanStock'},
        headers=auth_headers(user),
    )

    body = response.get_json()
    assert [j['id'] for j in body['jobs']] == [job.id]
    assert body['jobs'][0]['plan']['id'] == job.plan_id
    assert [p['id'] for p in body['pools']] == [pool.id]
    assert [v['id'] for v in body['visits']] == [visit.id]
    assert len(body['issues']) == 1
    assert body['vanStock'] == []


def test_carer_without_staff_record(client, factory, auth_headers):
    org = factory.org()
    user = factory.user(org, role=UserRole.CARER.value)
    factory.visit(org, factory.job(org, pool=factory.pool(org)))

    body = client.get(SYNC_URL, headers=auth_headers(user)).get_json()

    assert body['jobs'] == []
    assert body['visits'] == []


def test_device_timezone_param(client, factory, auth_headers):
    org = factory.org(timezone='Pacific/Auckland')
    manager = factory.user(org)
    factory.job(org, start=NOW.replace(tzinfo=None, hour=10))

    in_org_zone = client.get(SYNC_URL, headers=auth_headers(manager)).get_json()
    in_utc = client.get(SYNC_URL, query_string={'tz': 'UTC'}, headers=auth_headers(manager)).get_json()

    assert in_org_zone['jobs'] == []
    assert len(in_utc['jobs']) == 1


def test_response_is_not_cacheable(client, manager_org, auth_headers):
    _, manager = manager_org

    response = client.get(SYNC_URL, headers=auth_headers(manager))

    assert response.headers['Cache-Control'] == 'no-store'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_post_not_allowed(client, manager_org, auth_headers):
    _, manager = manager_org

    response = client.post(SYNC_URL, headers=auth_headers(manager))

    assert response.status_code == 405


def test_health(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'
