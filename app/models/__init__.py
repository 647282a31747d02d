"""
Modèles de l'application
Export centralisé de tous les modèles SQLAlchemy
"""

from app.models.enums import UserRole, JobStatus, IssueSeverity, SyncShape
from app.models.organization import Organization
from app.models.user import User
from app.models.carer import Carer
from app.models.client import Client
from app.models.pool import Pool
from app.models.plan import VisitTemplate, ServicePlan
from app.models.job import Job
from app.models.visit import VisitEntry, Reading, ChemicalsUsed
from app.models.issue import Issue

__all__ = [
    # Enums
    'UserRole',
    'JobStatus',
    'IssueSeverity',
    'SyncShape',
    # Models
    'Organization',
    'User',
    'Carer',
    'Client',
    'Pool',
    'VisitTemplate',
    'ServicePlan',
    'Job',
    'VisitEntry',
    'Reading',
    'ChemicalsUsed',
    'Issue',
]
