from app import db
from app.utils.helpers import utcnow
import uuid


class Client(db.Model):
    """Client final (propriétaire d'une ou plusieurs piscines)"""
    __tablename__ = 'clients'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'))

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    billing_address = db.Column(db.Text)
    preferred_channel = db.Column(db.String(20))  # WHATSAPP, SMS, EMAIL

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    pools = db.relationship('Pool', backref='client', lazy='dynamic')
