from functools import wraps
from flask import request, jsonify, g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request, get_jwt
from app.models import User
from app import db
import logging

logger = logging.getLogger(__name__)


def tenant_required(fn):
    """
    Décorateur qui vérifie:
    1. JWT valide (Bearer)
    2. org_id extrait du JWT (jamais de la query string ni d'un header!)
    3. User actif et membre de cette organisation

    Stocke org_id, user et user_role dans g pour accès facile
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        # Skip JWT verification for OPTIONS (CORS preflight)
        if request.method == 'OPTIONS':
            return fn(*args, **kwargs)

        # Les erreurs de token sont converties en 401 par les loaders JWT
        verify_jwt_in_request()

        jwt_claims = get_jwt()
        user_id = get_jwt_identity()

        org_id = jwt_claims.get('org_id')
        if not org_id:
            logger.warning(f"JWT sans org_id pour user {user_id}")
            return jsonify({'error': 'Token invalide - organisation manquante', 'code': 'TOKEN_INVALID'}), 401

        user = db.session.get(User, user_id)

        if not user:
            return jsonify({'error': 'Utilisateur non trouvé', 'code': 'NOT_FOUND'}), 404

        # Double vérification: l'organisation du JWT doit correspondre à celle du user
        if user.org_id != org_id:
            logger.warning(f"Tentative d'accès cross-tenant: user {user_id} (org {user.org_id}) avec token org {org_id}")
            return jsonify({'error': 'Accès refusé', 'code': 'FORBIDDEN'}), 403

        if not user.is_active:
            return jsonify({'error': 'Compte désactivé', 'code': 'ACCOUNT_DISABLED'}), 403

        g.org_id = org_id
        g.user = user
        g.user_role = jwt_claims.get('role') or user.role

        return fn(*args, **kwargs)

    return wrapper


def role_required(roles: list):
    """
    Décorateur pour vérifier un rôle spécifique

    Usage: @role_required(['ADMIN', 'MANAGER'])
    """
    def decorator(fn):
        @wraps(fn)
        @tenant_required
        def wrapper(*args, **kwargs):
            # Skip for OPTIONS (CORS preflight)
            if request.method == 'OPTIONS':
                return fn(*args, **kwargs)

            user_role = g.user_role
            required_roles = [roles] if isinstance(roles, str) else roles

            if user_role not in required_roles:
                logger.warning(f"Rôle refusé: user {g.user.id} ({user_role}) n'est pas dans {required_roles}")
                return jsonify({
                    'error': 'Rôle requis',
                    'required_roles': required_roles,
                    'current_role': user_role,
                    'code': 'INSUFFICIENT_ROLE'
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
