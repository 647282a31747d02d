from app import db
from app.models.enums import UserRole
from app.utils.helpers import utcnow, to_iso_utc
from werkzeug.security import generate_password_hash, check_password_hash
import uuid


class User(db.Model):
    """Membre d'une organisation (gérant, responsable, technicien ou client)"""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = db.Column(db.String(36), db.ForeignKey('organizations.id'), nullable=False, index=True)

    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20))
    name = db.Column(db.String(100), nullable=False)
    password_hash = db.Column(db.String(256))

    # Rôles: ADMIN, MANAGER, CARER, CLIENT
    role = db.Column(db.String(20), default=UserRole.CLIENT.value)

    is_active = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    last_login = db.Column(db.DateTime)

    # Contrainte unique email par organisation
    __table_args__ = (
        db.UniqueConstraint('org_id', 'email', name='unique_email_per_org'),
    )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self, include_private=False):
        data = {
            'id': self.id,
            'org_id': self.org_id,
            'email': self.email,
            'phone': self.phone,
            'name': self.name,
            'role': self.role,
            'is_active': self.is_active,
            'created_at': to_iso_utc(self.created_at)
        }
        if include_private:
            data['last_login'] = to_iso_utc(self.last_login)
        return data
