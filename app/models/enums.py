"""
Enums - Types énumérés pour les modèles
=======================================

Centralise tous les types énumérés pour éviter les "magic strings"
et garantir la cohérence des données.
"""

import enum


class UserRole(enum.Enum):
    """Rôles d'un membre d'organisation"""
    ADMIN = 'ADMIN'        # Gérant
    MANAGER = 'MANAGER'    # Responsable d'exploitation
    CARER = 'CARER'        # Technicien terrain
    CLIENT = 'CLIENT'      # Client final

    @classmethod
    def staff_roles(cls) -> list:
        """Rôles autorisés à utiliser l'app terrain"""
        return [cls.ADMIN.value, cls.MANAGER.value, cls.CARER.value]


class JobStatus(enum.Enum):
    """Statuts d'une intervention planifiée"""
    SCHEDULED = 'scheduled'
    EN_ROUTE = 'en_route'
    ON_SITE = 'on_site'
    COMPLETED = 'completed'
    FAILED = 'failed'
    CANCELLED = 'cancelled'


class IssueSeverity(enum.Enum):
    """Gravité d'un problème signalé pendant une visite"""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'


class SyncShape(enum.Enum):
    """Sous-ensembles (shapes) du snapshot de synchro mobile"""
    JOBS = 'jobs'
    POOLS = 'pools'
    VISITS = 'visits'
    READINGS = 'readings'
    CHEMICALS = 'chemicals'
    ISSUES = 'issues'
    VAN_STOCK = 'vanStock'

    @classmethod
    def is_valid(cls, shape: str) -> bool:
        return shape in [s.value for s in cls]

    @classmethod
    def defaults(cls) -> list:
        """Shapes envoyées quand le client n'en demande aucune"""
        return [cls.JOBS.value, cls.POOLS.value, cls.VISITS.value]
