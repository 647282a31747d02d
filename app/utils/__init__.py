from app.utils.helpers import utcnow, to_iso_utc, local_day_window, resolve_timezone

__all__ = ['utcnow', 'to_iso_utc', 'local_day_window', 'resolve_timezone']
