from app import db
from app.models.enums import IssueSeverity
from app.utils.helpers import utcnow, to_iso_utc
import uuid


class Issue(db.Model):
    """Problème signalé sur une piscine (souvent pendant une visite)"""
    __tablename__ = 'issues'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    visit_id = db.Column(db.String(36), db.ForeignKey('visit_entries.id'), index=True)
    pool_id = db.Column(db.String(36), db.ForeignKey('pools.id'), index=True)

    type = db.Column(db.String(50), nullable=False)  # equipment, leak, water_quality...
    severity = db.Column(db.String(10), default=IssueSeverity.MEDIUM.value)
    description = db.Column(db.Text, nullable=False)
    requires_quote = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(20), default='open')

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_sync_dict(self):
        return {
            'id': self.id,
            'orgId': self.org_id,
            'visitId': self.visit_id,
            'poolId': self.pool_id,
            'type': self.type,
            'severity': self.severity,
            'description': self.description,
            'requiresQuote': self.requires_quote,
            'status': self.status,
            'createdAt': to_iso_utc(self.created_at),
        }
