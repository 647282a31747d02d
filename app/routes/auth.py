"""
Routes d'authentification
=========================

Connexion par email / mot de passe et profil courant.
Les tokens JWT portent org_id et role: c'est la seule source du tenant.
"""

from flask import Blueprint, request, jsonify, g, current_app
from flask_jwt_extended import create_access_token
from app import db, limiter
from app.models import User, UserRole
from app.utils.decorators import tenant_required
from app.utils.helpers import utcnow
import logging

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)

auth_limit = limiter.limit("5 per minute", error_message="Trop de tentatives. Réessayez dans 1 minute.")


def create_token_with_claims(user: User) -> str:
    """
    Crée le token d'accès avec les claims personnalisés.

    - Inclut org_id, role et email dans le token
    - Techniciens: durée de vie courte (app mobile)
    """
    additional_claims = {
        'org_id': user.org_id,
        'role': user.role,
        'email': user.email,
    }

    if user.role == UserRole.CARER.value:
        expires = current_app.config['JWT_MOBILE_ACCESS_TOKEN_EXPIRES']
    else:
        expires = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']

    return create_access_token(
        identity=user.id,
        additional_claims=additional_claims,
        expires_delta=expires
    )


@auth_bp.route('/login', methods=['POST'])
@auth_limit
def login():
    """Connexion utilisateur (header X-Org-ID requis)"""
    data = request.get_json(silent=True) or {}
    org_id = request.headers.get('X-Org-ID')

    if not org_id:
        return jsonify({'error': 'X-Org-ID header is required', 'code': 'BAD_REQUEST'}), 400

    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        return jsonify({'error': 'Email and password are required', 'code': 'BAD_REQUEST'}), 400

    user = User.query.filter_by(org_id=org_id, email=email).first()

    # Message générique pour éviter l'énumération d'utilisateurs
    if not user or not user.check_password(password):
        logger.warning(f"Échec de connexion pour {email} (org {org_id})")
        return jsonify({'error': 'Email ou mot de passe incorrect', 'code': 'INVALID_CREDENTIALS'}), 401

    if not user.is_active:
        return jsonify({'error': 'Compte désactivé', 'code': 'ACCOUNT_DISABLED'}), 403

    user.last_login = utcnow()
    db.session.commit()

    access_token = create_token_with_claims(user)
    logger.info(f"Connexion réussie: user {user.id} ({user.role}) org {org_id}")

    return jsonify({
        'access_token': access_token,
        'user': user.to_dict()
    })


@auth_bp.route('/me', methods=['GET'])
@tenant_required
def me():
    """Profil de l'utilisateur connecté"""
    return jsonify({'user': g.user.to_dict(include_private=True)})
