from app import db
from app.utils.helpers import utcnow
import uuid


class VisitTemplate(db.Model):
    """Modèle de visite (checklist + durée standard)"""
    __tablename__ = 'visit_templates'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    checklist = db.Column(db.JSON, default=list)
    service_duration_min = db.Column(db.Integer, default=45)

    created_at = db.Column(db.DateTime, default=utcnow)


class ServicePlan(db.Model):
    """
    Contrat d'entretien récurrent d'une piscine.
    Les interventions (Job) sont générées à partir de ces plans.
    """
    __tablename__ = 'service_plans'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    pool_id = db.Column(db.String(36), db.ForeignKey('pools.id'), nullable=False, index=True)
    visit_template_id = db.Column(db.String(36), db.ForeignKey('visit_templates.id'))

    frequency = db.Column(db.String(20), default='weekly')  # weekly, biweekly, monthly
    dow = db.Column(db.String(3))  # mon..sun
    dom = db.Column(db.Integer)    # 1..31
    window_start = db.Column(db.String(8))  # "09:00:00"
    window_end = db.Column(db.String(8))
    price_cents = db.Column(db.Integer, default=0)
    currency = db.Column(db.String(3), default='USD')
    starts_on = db.Column(db.Date)
    status = db.Column(db.String(20), default='active')

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    pool = db.relationship('Pool', backref=db.backref('plans', lazy='dynamic'))
    visit_template = db.relationship('VisitTemplate')

    def to_summary_dict(self):
        return {
            'id': self.id,
            'visitTemplateId': self.visit_template_id,
        }
