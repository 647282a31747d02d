"""
Modèle Job - Intervention planifiée
Unité de travail d'un technicien sur une fenêtre horaire d'une journée
"""

from app import db
from app.models.enums import JobStatus
from app.utils.helpers import utcnow, to_iso_utc
import uuid


class Job(db.Model):
    """Intervention planifiée sur une piscine"""
    __tablename__ = 'jobs'

    # Index composites pour les requêtes "interventions du jour"
    __table_args__ = (
        db.Index('idx_job_org_window', 'org_id', 'window_start'),
        db.Index('idx_job_org_carer_window', 'org_id', 'assigned_carer_id', 'window_start'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    pool_id = db.Column(db.String(36), db.ForeignKey('pools.id'), index=True)
    plan_id = db.Column(db.String(36), db.ForeignKey('service_plans.id'))
    assigned_carer_id = db.Column(db.String(36), db.ForeignKey('carers.id'))

    status = db.Column(db.String(20), default=JobStatus.SCHEDULED.value)

    # Fenêtre d'intervention (UTC naïf)
    window_start = db.Column(db.DateTime, nullable=False)
    window_end = db.Column(db.DateTime, nullable=False)
    scheduled_start = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    pool = db.relationship('Pool', backref=db.backref('jobs', lazy='dynamic'))
    plan = db.relationship('ServicePlan')
    visits = db.relationship('VisitEntry', back_populates='job', lazy='dynamic')

    def to_sync_dict(self, include_plan=False):
        data = {
            'id': self.id,
            'orgId': self.org_id,
            'poolId': self.pool_id,
            'planId': self.plan_id,
            'assignedCarerId': self.assigned_carer_id,
            'status': self.status,
            'windowStart': to_iso_utc(self.window_start),
            'windowEnd': to_iso_utc(self.window_end),
            'scheduledStart': to_iso_utc(self.scheduled_start),
            'createdAt': to_iso_utc(self.created_at),
            'updatedAt': to_iso_utc(self.updated_at),
            'pool': self.pool.to_summary_dict() if self.pool else None,
        }
        if include_plan:
            data['plan'] = self.plan.to_summary_dict() if self.plan else None
        return data
