"""
Modèles de visite
=================

VisitEntry : passage d'un technicien sur une intervention
Reading    : mesures de chimie de l'eau relevées pendant la visite
ChemicalsUsed : produits consommés pendant la visite
"""

from app import db
from app.utils.helpers import utcnow, to_iso_utc
import uuid


class VisitEntry(db.Model):
    """Passage d'un technicien sur une intervention"""
    __tablename__ = 'visit_entries'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    job_id = db.Column(db.String(36), db.ForeignKey('jobs.id'), nullable=False, index=True)

    started_at = db.Column(db.DateTime)
    arrived_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)
    rating = db.Column(db.Integer)
    client_signature_url = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    job = db.relationship('Job', back_populates='visits')
    readings = db.relationship('Reading', backref='visit', lazy='dynamic')
    chemicals = db.relationship('ChemicalsUsed', backref='visit', lazy='dynamic')

    def to_sync_dict(self):
        return {
            'id': self.id,
            'orgId': self.org_id,
            'jobId': self.job_id,
            'startedAt': to_iso_utc(self.started_at),
            'arrivedAt': to_iso_utc(self.arrived_at),
            'completedAt': to_iso_utc(self.completed_at),
            'rating': self.rating,
            'clientSignatureUrl': self.client_signature_url,
            'createdAt': to_iso_utc(self.created_at),
            'updatedAt': to_iso_utc(self.updated_at),
            'job': {
                'id': self.job.id,
                'poolId': self.job.pool_id,
            } if self.job else None,
        }


class Reading(db.Model):
    """Relevé de chimie de l'eau"""
    __tablename__ = 'readings'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    visit_id = db.Column(db.String(36), db.ForeignKey('visit_entries.id'), nullable=False, index=True)

    ph = db.Column(db.Float)
    chlorine_free = db.Column(db.Float)      # ppm
    chlorine_total = db.Column(db.Float)     # ppm
    alkalinity = db.Column(db.Integer)       # ppm
    calcium_hardness = db.Column(db.Integer)  # ppm
    cyanuric_acid = db.Column(db.Integer)    # ppm
    temp_c = db.Column(db.Float)
    measured_at = db.Column(db.DateTime, default=utcnow)

    created_at = db.Column(db.DateTime, default=utcnow)

    def to_sync_dict(self):
        return {
            'id': self.id,
            'orgId': self.org_id,
            'visitId': self.visit_id,
            'ph': self.ph,
            'chlorineFree': self.chlorine_free,
            'chlorineTotal': self.chlorine_total,
            'alkalinity': self.alkalinity,
            'calciumHardness': self.calcium_hardness,
            'cyanuricAcid': self.cyanuric_acid,
            'tempC': self.temp_c,
            'measuredAt': to_iso_utc(self.measured_at),
            'createdAt': to_iso_utc(self.created_at),
        }


class ChemicalsUsed(db.Model):
    """Produit chimique consommé pendant une visite"""
    __tablename__ = 'chemicals_used'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    visit_id = db.Column(db.String(36), db.ForeignKey('visit_entries.id'), nullable=False, index=True)

    chemical = db.Column(db.String(100), nullable=False)
    qty = db.Column(db.Float)
    unit = db.Column(db.String(20))  # kg, L, tabs
    lot_no = db.Column(db.String(50))
    cost_cents = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=utcnow)

    def to_sync_dict(self):
        return {
            'id': self.id,
            'orgId': self.org_id,
            'visitId': self.visit_id,
            'chemical': self.chemical,
            'qty': self.qty,
            'unit': self.unit,
            'lotNo': self.lot_no,
            'costCents': self.cost_cents,
            'createdAt': to_iso_utc(self.created_at),
        }
