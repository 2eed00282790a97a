"""Application ports - interfaces for external adapters."""

from crmrules.application.ports.permission_checker import PermissionChecker
from crmrules.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
