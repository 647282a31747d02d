from app import db
from app.utils.helpers import utcnow
import uuid


class Carer(db.Model):
    """
    Fiche staff d'un technicien terrain.
    Un utilisateur CARER sans fiche Carer n'a aucune intervention assignée.
    """
    __tablename__ = 'carers'

    __table_args__ = (
        db.UniqueConstraint('org_id', 'user_id', name='unique_carer_per_org_user'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), index=True)

    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    active = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    user = db.relationship('User', backref=db.backref('carer_profiles', lazy='dynamic'))
    jobs = db.relationship('Job', backref='assigned_carer', lazy='dynamic')
