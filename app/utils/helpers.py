"""
Fonctions utilitaires
Helpers réutilisables dans toute l'application (dates, fuseaux, paramètres de synchro)
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# 9999-12-31T23:59:59.999Z
MAX_EPOCH_MS = 253402300799999


def utcnow():
    """Datetime UTC naïf, format de stockage de toutes les colonnes DateTime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso_utc(value):
    """
    Sérialise un datetime UTC naïf en ISO-8601 suffixé 'Z'

    Returns:
        str ou None si value est vide
    """
    if not value:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + 'Z'


def to_epoch_ms(value: datetime) -> int:
    """Convertit un datetime aware en millisecondes depuis l'epoch"""
    return int(value.timestamp() * 1000)


def from_epoch_ms(ms) -> datetime:
    """Convertit des millisecondes epoch en datetime UTC aware"""
    return EPOCH + timedelta(milliseconds=ms)


def resolve_timezone(*candidates):
    """
    Retourne le premier fuseau IANA valide parmi les candidats.
    Les noms vides ou inconnus sont ignorés; UTC en dernier recours.
    """
    for name in candidates:
        if not name:
            continue
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Fuseau horaire inconnu ignoré: {name!r}")
    return timezone.utc


def local_day_window(now: datetime, tz) -> tuple:
    """
    Calcule la journée locale [minuit, minuit + 1 jour) contenant `now`.

    Args:
        now: datetime aware (UTC)
        tz: tzinfo du fuseau de référence

    Returns:
        tuple (start, end) en UTC naïf, prêts pour les colonnes DateTime
    """
    local_now = now.astimezone(tz)
    start_local = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Arithmétique en heure murale: gère les journées de 23h/25h (DST)
    end_local = start_local + timedelta(days=1)
    return (
        start_local.astimezone(timezone.utc).replace(tzinfo=None),
        end_local.astimezone(timezone.utc).replace(tzinfo=None),
    )


def parse_shapes(raw, valid, defaults):
    """
    Parse le paramètre `shapes` (liste séparée par virgules).

    Absent ou vide => defaults. Les noms inconnus sont ignorés sans erreur,
    l'ordre et l'unicité sont préservés.
    """
    if not raw:
        return list(defaults)

    shapes = []
    for name in raw.split(','):
        name = name.strip()
        if name in valid and name not in shapes:
            shapes.append(name)
    return shapes


def parse_since(raw):
    """
    Parse le watermark `since` (millisecondes epoch).

    Absent, non numérique, <= 0 ou hors plage datetime => None (resynchro complète).
    """
    if raw is None or raw == '':
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    if value <= 0 or value > MAX_EPOCH_MS:
        return None
    return value
