"""
Application Flask - PoolCare Backend
API REST pour les sociétés d'entretien de piscines (synchro mobile des techniciens)
"""

from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import config
import logging

__version__ = '1.0.0'

db = SQLAlchemy()
jwt = JWTManager()
migrate = Migrate()


def get_rate_limit_key():
    """
    Retourne la clé pour le rate limiting.
    - 'preflight' pour les requêtes OPTIONS (CORS preflight) pour les exempter
    - IP de l'utilisateur sinon
    """
    if request.method == 'OPTIONS':
        return 'preflight'

    ip = get_remote_address()
    if not ip:
        ip = request.headers.get('X-Forwarded-For', request.headers.get('X-Real-IP', '127.0.0.1'))
        if ',' in ip:
            ip = ip.split(',')[0].strip()

    return ip or '127.0.0.1'


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["2000 per day", "500 per hour"],
)

# Configuration logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def register_jwt_handlers():
    """Réponses JSON homogènes pour les erreurs de token"""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return {'error': 'Token manquant', 'code': 'TOKEN_MISSING'}, 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.warning(f"Token invalide: {reason}")
        return {'error': 'Token invalide', 'code': 'TOKEN_INVALID'}, 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return {'error': 'Token expiré', 'code': 'TOKEN_EXPIRED'}, 401


def create_app(config_name='default'):
    """
    Factory function pour créer l'application Flask

    Args:
        config_name: Nom de la configuration (development, production, testing)

    Returns:
        Flask app configurée
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Vérifications de sécurité en production
    if config_name == 'production':
        config[config_name].init_app(app)

    logging.getLogger('app').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialisation des extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)
    register_jwt_handlers()

    # CORS - Utiliser les origines configurées (PAS de wildcard en prod!)
    cors_origins = app.config.get('CORS_ORIGINS', ['http://localhost:3000'])
    CORS(app, resources={
        r"/api/*": {
            "origins": cors_origins,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
            "supports_credentials": app.config.get('CORS_SUPPORTS_CREDENTIALS', True)
        }
    })

    # Headers de sécurité
    @app.after_request
    def add_security_headers(response):
        if config_name == 'production':
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        # Les snapshots de synchro ne doivent jamais être mis en cache
        if request.path.startswith('/api/mobile/'):
            response.headers['Cache-Control'] = 'no-store'

        return response

    # ==================== BLUEPRINTS ====================

    # Routes d'authentification
    from app.routes.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Routes synchro mobile (app technicien)
    from app.routes.mobile import mobile_bp
    app.register_blueprint(mobile_bp, url_prefix='/api/mobile')

    # ==================== ERROR HANDLERS ====================

    @app.errorhandler(400)
    def bad_request(error):
        return {'error': 'Requête invalide', 'code': 'BAD_REQUEST'}, 400

    @app.errorhandler(401)
    def unauthorized(error):
        return {'error': 'Non autorisé', 'code': 'UNAUTHORIZED'}, 401

    @app.errorhandler(403)
    def forbidden(error):
        return {'error': 'Accès refusé', 'code': 'FORBIDDEN'}, 403

    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Ressource non trouvée', 'code': 'NOT_FOUND'}, 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return {'error': 'Méthode non autorisée', 'code': 'METHOD_NOT_ALLOWED'}, 405

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        return {'error': 'Trop de requêtes. Réessayez plus tard.', 'code': 'RATE_LIMITED'}, 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Erreur interne: {str(getattr(error, 'original_exception', error))}")
        return {'error': 'Erreur interne du serveur', 'code': 'INTERNAL_ERROR'}, 500

    # ==================== HEALTH CHECK ====================

    @app.route('/api/health')
    def health_check():
        """Endpoint de vérification de santé"""
        return {'status': 'healthy', 'version': __version__}

    # Import des modèles pour que db.create_all / Alembic les voient
    from app import models  # noqa: F401

    logger.info(f"Application démarrée en mode {config_name}")

    return app
