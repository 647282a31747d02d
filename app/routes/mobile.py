"""Mobile routes - Endpoint de synchronisation delta pour l'app terrain.

GET /api/mobile/sync?since=<epoch_ms>&shapes=<csv>&tz=<IANA>

L'organisation, l'utilisateur et le rôle viennent du JWT, jamais de la requête.
"""
from flask import Blueprint, request, jsonify, g, current_app

from app import limiter
from app.models import UserRole, SyncShape
from app.services.sync_service import SyncService
from app.utils.decorators import role_required
from app.utils.helpers import parse_shapes, parse_since

mobile_bp = Blueprint('mobile', __name__)

VALID_SHAPES = [s.value for s in SyncShape]


def _sync_rate_limit():
    return current_app.config.get('SYNC_RATE_LIMIT', '120 per minute')


@mobile_bp.route('/sync', methods=['GET'])
@limiter.limit(_sync_rate_limit)
@role_required(UserRole.staff_roles())
def sync():
    """
    Snapshot des données du jour pour le technicien ou le responsable.

    Query:
        - since: watermark en millisecondes epoch (absent => resynchro complète)
        - shapes: liste séparée par virgules (défaut: jobs,pools,visits)
        - tz: fuseau IANA de l'appareil (optionnel)
    """
    shapes = parse_shapes(request.args.get('shapes'), VALID_SHAPES, SyncShape.defaults())
    since = parse_since(request.args.get('since'))

    snapshot = SyncService.get_delta(
        g.org_id,
        g.user.id,
        g.user_role,
        shapes,
        since=since,
        tz_name=request.args.get('tz'),
    )
    return jsonify(snapshot.to_dict())
