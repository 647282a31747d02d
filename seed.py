#!/usr/bin/env python3
"""
Seed initial data for the PoolCare backend.

Creates:
  1. Database tables (if missing)
  2. Demo organization + admin + manager
  3. Three carers (user + staff record)
  4. Clients, pools, visit templates, service plans
  5. Today's jobs; completed ones get a visit, a reading and a chemical record

Usage:
    python seed.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv
load_dotenv()

from datetime import datetime, timedelta, timezone
from app import create_app, db


# ── Configuration ────────────────────────────────────────────
ORG_ID       = 'poolpro-org-001'
ORG_NAME     = 'PoolPro Maintenance Co.'
ORG_SLUG     = 'poolpro'
ORG_TIMEZONE = 'UTC'

ADMIN_EMAIL      = 'admin@poolpro.com'
ADMIN_PASSWORD   = 'admin123'
MANAGER_EMAIL    = 'manager@poolpro.com'
MANAGER_PASSWORD = 'manager123'
CARER_PASSWORD   = 'carer123'

CARERS = [
    {'name': 'John Doe', 'phone': '+1234567891', 'email': 'john@poolpro.com'},
    {'name': 'Jane Smith', 'phone': '+1234567892', 'email': 'jane@poolpro.com'},
    {'name': 'Mike Johnson', 'phone': '+1234567893', 'email': 'mike@poolpro.com'},
]

CLIENTS = [
    {'name': 'Sarah Johnson', 'email': 'sarah.johnson@example.com', 'phone': '+1234567900',
     'billing_address': '123 Oak Street, Springfield, IL 62701', 'preferred_channel': 'WHATSAPP'},
    {'name': 'Robert Williams', 'email': 'robert.w@example.com', 'phone': '+1234567901',
     'billing_address': '456 Maple Avenue, Springfield, IL 62702', 'preferred_channel': 'SMS'},
    {'name': 'Emily Davis', 'email': 'emily.davis@example.com', 'phone': '+1234567902',
     'billing_address': '789 Pine Road, Springfield, IL 62703', 'preferred_channel': 'EMAIL'},
]

POOLS = [
    {'name': 'Main Pool', 'volume_l': 20000, 'surface_type': 'concrete', 'client': 0},
    {'name': 'Backyard Pool', 'volume_l': 15000, 'surface_type': 'vinyl', 'client': 0},
    {'name': 'Swimming Pool', 'volume_l': 25000, 'surface_type': 'fiberglass', 'client': 1},
    {'name': 'Pool', 'volume_l': 18000, 'surface_type': 'concrete', 'client': 2},
]

DEFAULT_TARGETS = {'ph': [7.2, 7.6], 'chlorineFree': [1.0, 3.0], 'alkalinity': [80, 120]}
# ─────────────────────────────────────────────────────────────


def _get_or_create_user(org_id, email, name, role, password, phone=None):
    from app.models import User
    user = User.query.filter_by(org_id=org_id, email=email).first()
    if user:
        return user, False
    user = User(org_id=org_id, email=email, name=name, role=role, phone=phone, is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()
    return user, True


def seed():
    env = os.environ.get('FLASK_ENV', 'development')
    app = create_app(env)

    with app.app_context():
        from app.models import (
            Organization, Carer, Client, Pool, VisitTemplate, ServicePlan,
            Job, VisitEntry, Reading, ChemicalsUsed, UserRole, JobStatus
        )
        from app.utils.helpers import local_day_window, resolve_timezone

        # 1. Create tables
        db.create_all()
        print('✓ Tables créées / vérifiées')

        # 2. Organization
        org = db.session.get(Organization, ORG_ID)
        if org:
            print(f'✓ Organisation existe déjà: {org.name}')
            print('Seed déjà appliqué, rien à faire.')
            return

        org = Organization(id=ORG_ID, name=ORG_NAME, slug=ORG_SLUG, timezone=ORG_TIMEZONE, is_active=True)
        db.session.add(org)
        db.session.flush()
        print(f'✓ Organisation créée: {ORG_NAME} ({ORG_ID})')

        _get_or_create_user(ORG_ID, ADMIN_EMAIL, 'Admin User', UserRole.ADMIN.value, ADMIN_PASSWORD)
        _get_or_create_user(ORG_ID, MANAGER_EMAIL, 'Ops Manager', UserRole.MANAGER.value, MANAGER_PASSWORD)
        print('✓ Admin et manager')

        # 3. Carers
        carers = []
        for data in CARERS:
            user, _ = _get_or_create_user(
                ORG_ID, data['email'], data['name'], UserRole.CARER.value, CARER_PASSWORD, data['phone']
            )
            carer = Carer(org_id=ORG_ID, user_id=user.id, name=data['name'], phone=data['phone'], active=True)
            db.session.add(carer)
            carers.append(carer)
        db.session.flush()
        print(f'✓ {len(carers)} techniciens')

        # 4. Clients, pools, templates, plans
        clients = []
        for data in CLIENTS:
            client = Client(org_id=ORG_ID, **data)
            db.session.add(client)
            clients.append(client)
        db.session.flush()

        pools = []
        for data in POOLS:
            client = clients[data['client']]
            pool = Pool(
                org_id=ORG_ID,
                client_id=client.id,
                name=data['name'],
                address=client.billing_address,
                volume_l=data['volume_l'],
                surface_type=data['surface_type'],
                targets=DEFAULT_TARGETS,
                equipment={'pump': 'Variable Speed Pump', 'filter': 'Sand Filter'},
            )
            db.session.add(pool)
            pools.append(pool)

        template = VisitTemplate(
            org_id=ORG_ID,
            name='Weekly Maintenance',
            checklist=[
                'Skim surface debris',
                'Vacuum pool floor',
                'Test water chemistry (pH, chlorine)',
                'Add chemicals as needed',
                'Check pump and filter',
            ],
            service_duration_min=45,
        )
        db.session.add(template)
        db.session.flush()

        plans = []
        for pool in pools:
            plan = ServicePlan(
                org_id=ORG_ID,
                pool_id=pool.id,
                visit_template_id=template.id,
                frequency='weekly',
                window_start='09:00:00',
                window_end='11:00:00',
                price_cents=15000,
                currency='USD',
                status='active',
            )
            db.session.add(plan)
            plans.append(plan)
        db.session.flush()
        print(f'✓ {len(clients)} clients, {len(pools)} piscines, {len(plans)} plans')

        # 5. Today's jobs (round-robin sur les techniciens)
        now = datetime.now(timezone.utc)
        day_start, _ = local_day_window(now, resolve_timezone(ORG_TIMEZONE))
        job_count = visit_count = 0
        for index, plan in enumerate(plans):
            window_start = day_start + timedelta(hours=8 + 2 * index)
            status = JobStatus.COMPLETED.value if index % 2 == 0 else JobStatus.SCHEDULED.value
            job = Job(
                org_id=ORG_ID,
                plan_id=plan.id,
                pool_id=plan.pool_id,
                assigned_carer_id=carers[index % len(carers)].id,
                status=status,
                window_start=window_start,
                window_end=window_start + timedelta(hours=2),
                scheduled_start=window_start,
            )
            db.session.add(job)
            db.session.flush()
            job_count += 1

            if status != JobStatus.COMPLETED.value:
                continue

            visit = VisitEntry(
                org_id=ORG_ID,
                job_id=job.id,
                started_at=window_start + timedelta(minutes=10),
                arrived_at=window_start + timedelta(minutes=15),
                completed_at=window_start + timedelta(minutes=45),
                rating=5,
            )
            db.session.add(visit)
            db.session.flush()
            db.session.add(Reading(
                org_id=ORG_ID, visit_id=visit.id, ph=7.4, chlorine_total=2.0, temp_c=28.0,
                measured_at=visit.completed_at,
            ))
            db.session.add(ChemicalsUsed(
                org_id=ORG_ID, visit_id=visit.id, chemical='Liquid chlorine', qty=2.5, unit='L',
                cost_cents=1200,
            ))
            visit_count += 1

        db.session.commit()
        print(f'✓ {job_count} interventions aujourd\'hui, {visit_count} visites terminées')

        # Done
        print('\n' + '=' * 50)
        print('SEED TERMINÉ')
        print('=' * 50)
        print(f'\nAdmin:    {ADMIN_EMAIL} / {ADMIN_PASSWORD}')
        print(f'Manager:  {MANAGER_EMAIL} / {MANAGER_PASSWORD}')
        print(f'Carers:   {", ".join(c["email"] for c in CARERS)} / {CARER_PASSWORD}')
        print(f'Org ID:   {ORG_ID}')


if __name__ == '__main__':
    seed()
