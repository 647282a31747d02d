"""Mobile delta-sync: builds the snapshot pulled by the field app."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
import logging

from flask import current_app
from sqlalchemy.orm import joinedload

from app.models import (
    Carer, Job, Pool, VisitEntry, Reading, ChemicalsUsed, Issue,
    UserRole, SyncShape
)
from app.services.tenant_scope import TenantScope
from app.utils.helpers import (
    EPOCH, from_epoch_ms, local_day_window, resolve_timezone, to_epoch_ms
)

logger = logging.getLogger(__name__)


def current_time():
    """Server clock (aware UTC)."""
    return datetime.now(timezone.utc)


@dataclass
class DeltaSnapshot:
    """Sync response. Every shape is always present, empty when not requested."""
    server_ts: int
    jobs: List[dict] = field(default_factory=list)
    pools: List[dict] = field(default_factory=list)
    visits: List[dict] = field(default_factory=list)
    readings: List[dict] = field(default_factory=list)
    chemicals: List[dict] = field(default_factory=list)
    issues: List[dict] = field(default_factory=list)
    van_stock: List[dict] = field(default_factory=list)
    # No deletion propagation exists yet: always empty
    tombstones: List[dict] = field(default_factory=list)

    def to_dict(self):
        return {
            'serverTs': self.server_ts,
            'jobs': self.jobs,
            'pools': self.pools,
            'visits': self.visits,
            'readings': self.readings,
            'chemicals': self.chemicals,
            'issues': self.issues,
            'vanStock': self.van_stock,
            'tombstones': self.tombstones,
        }

    def counts(self):
        return {key: len(value) for key, value in self.to_dict().items() if isinstance(value, list)}


class SyncService:
    """Service to build mobile sync snapshots."""

    @staticmethod
    def get_delta(org_id, user_id, role, shapes, since: Optional[int] = None,
                  tz_name: Optional[str] = None, now: Optional[datetime] = None) -> DeltaSnapshot:
        """
        Build the snapshot for one pull request.

        Args:
            org_id (str): Organization of the caller, taken from the token.
            user_id (str): Caller's user id.
            role (str): Caller's role (CARER gets only their own work).
            shapes (iterable): Requested shape names; unknown names are ignored.
            since (int, optional): Client watermark in epoch ms. Accepted but
                not applied to any shape: jobs are always "today".
            tz_name (str, optional): Device time zone used for "today".
            now (datetime, optional): Aware UTC clock override.

        Returns:
            DeltaSnapshot: shapes in processing order plus the server timestamp.
        """
        now = now or current_time()
        scope = TenantScope(org_id)
        requested = {s for s in shapes if SyncShape.is_valid(s)}
        is_carer = role == UserRole.CARER.value
        since_at = from_epoch_ms(since) if since else EPOCH

        logger.info(
            f"Sync pull org={org_id} user={user_id} role={role} "
            f"shapes={sorted(requested)} since={since_at.isoformat()}"
        )

        snapshot = DeltaSnapshot(server_ts=to_epoch_ms(now))

        # 1. Jobs: today's window only, whatever the watermark
        jobs = []
        if SyncShape.JOBS.value in requested:
            tz = SyncService._day_timezone(scope, tz_name)
            day_start, day_end = local_day_window(now, tz)
            if is_carer:
                jobs = SyncService._carer_jobs(scope, user_id, day_start, day_end)
            else:
                jobs = SyncService._org_jobs(scope, day_start, day_end)
            snapshot.jobs = [j.to_sync_dict(include_plan=is_carer) for j in jobs]

        # 2. Pools referenced by the jobs above
        if SyncShape.POOLS.value in requested:
            pools = scope.where_in(Pool, 'id', [j.pool_id for j in jobs])
            snapshot.pools = [p.to_sync_dict() for p in pools]

        # 3. Visits
        visits = []
        if SyncShape.VISITS.value in requested:
            if is_carer:
                visits = scope.where_in(
                    VisitEntry, 'job_id', [j.id for j in jobs],
                    options=[joinedload(VisitEntry.job)],
                    order_by=VisitEntry.created_at,
                )
            else:
                # Managers receive every visit of the organization
                visits = (
                    scope.query(VisitEntry)
                    .options(joinedload(VisitEntry.job))
                    .order_by(VisitEntry.created_at)
                    .all()
                )
            snapshot.visits = [v.to_sync_dict() for v in visits]

        # 4. Children of the resolved visits
        visit_ids = [v.id for v in visits]
        if SyncShape.READINGS.value in requested and visit_ids:
            readings = scope.where_in(Reading, 'visit_id', visit_ids, order_by=Reading.measured_at)
            snapshot.readings = [r.to_sync_dict() for r in readings]

        if SyncShape.CHEMICALS.value in requested and visit_ids:
            chemicals = scope.where_in(ChemicalsUsed, 'visit_id', visit_ids, order_by=ChemicalsUsed.created_at)
            snapshot.chemicals = [c.to_sync_dict() for c in chemicals]

        if SyncShape.ISSUES.value in requested and visit_ids:
            issues = scope.where_in(Issue, 'visit_id', visit_ids, order_by=Issue.created_at)
            snapshot.issues = [i.to_sync_dict() for i in issues]

        # 5. Van stock
        if SyncShape.VAN_STOCK.value in requested and is_carer:
            # TODO: fill from the carer's van warehouse once inventory has stock-per-location
            snapshot.van_stock = []

        logger.info(f"Sync snapshot org={org_id} user={user_id} counts={snapshot.counts()}")
        return snapshot

    @staticmethod
    def _day_timezone(scope, tz_name):
        """Device zone, then organization zone, then DEFAULT_TIMEZONE."""
        org = scope.organization()
        return resolve_timezone(
            tz_name,
            org.timezone if org else None,
            current_app.config.get('DEFAULT_TIMEZONE', 'UTC'),
        )

    @staticmethod
    def _carer_jobs(scope, user_id, day_start, day_end):
        carer = scope.first(Carer, user_id=user_id)
        if not carer:
            logger.info(f"No carer record for user {user_id} in org {scope.org_id}")
            return []

        return (
            scope.query(Job)
            .filter(
                Job.assigned_carer_id == carer.id,
                Job.window_start >= day_start,
                Job.window_start < day_end,
            )
            .options(joinedload(Job.pool), joinedload(Job.plan))
            .order_by(Job.window_start)
            .all()
        )

    @staticmethod
    def _org_jobs(scope, day_start, day_end):
        return (
            scope.query(Job)
            .filter(Job.window_start >= day_start, Job.window_start < day_end)
            .options(joinedload(Job.pool))
            .order_by(Job.window_start)
            .all()
        )
