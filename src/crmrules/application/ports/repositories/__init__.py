"""Repository ports."""

from crmrules.application.ports.repositories.office_repository import OfficeRepository
from crmrules.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from crmrules.application.ports.repositories.role_repository import RoleRepository

__all__ = [
    "OfficeRepository",
    "PermissionRepository",
    "RoleRepository",
]
