"""
Modèle Pool - Piscine entretenue
"""

from app import db
from app.utils.helpers import utcnow
import uuid


class Pool(db.Model):
    """Piscine physique rattachée à un client"""
    __tablename__ = 'pools'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    client_id = db.Column(db.String(36), db.ForeignKey('clients.id'), index=True)

    name = db.Column(db.String(100))
    address = db.Column(db.Text)
    volume_l = db.Column(db.Integer)  # litres
    surface_type = db.Column(db.String(30))  # concrete, vinyl, fiberglass, tile
    equipment = db.Column(db.JSON, default=dict)
    # Cibles de chimie de l'eau: {"ph": [7.2, 7.6], "chlorineFree": [1, 3], ...}
    targets = db.Column(db.JSON)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_summary_dict(self):
        """Version réduite embarquée dans chaque intervention"""
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
        }

    def to_sync_dict(self):
        return {
            'id': self.id,
            'orgId': self.org_id,
            'clientId': self.client_id,
            'name': self.name,
            'address': self.address,
            'volumeL': self.volume_l,
            'targets': self.targets,
        }
