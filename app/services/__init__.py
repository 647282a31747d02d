"""
Services de l'application
Logique métier réutilisable
"""

from app.services.tenant_scope import TenantScope, TenantScopeError
from app.services.sync_service import SyncService, DeltaSnapshot

__all__ = [
    'TenantScope',
    'TenantScopeError',
    'SyncService',
    'DeltaSnapshot',
]
