from app import db
from app.utils.helpers import utcnow
import uuid


class Organization(db.Model):
    """Société d'entretien cliente de la plateforme SaaS (le tenant)"""
    __tablename__ = 'organizations'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(50), unique=True)
    # Fuseau IANA ("Africa/Accra"), sert au calcul de "aujourd'hui"
    timezone = db.Column(db.String(64))
    is_active = db.Column(db.Boolean, default=True)
    settings = db.Column(db.JSON, default=dict)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relations
    users = db.relationship('User', backref='organization', lazy='dynamic')
