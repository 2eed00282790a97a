"""Domain entities."""

from crmrules.domain.entities.office import (
    BusinessDay,
    EscalationRules,
    Holiday,
    OfficeCalendarProfile,
)
from crmrules.domain.entities.permission import Permission
from crmrules.domain.entities.role import Role, RoleTreeNode

__all__ = [
    "BusinessDay",
    "EscalationRules",
    "Holiday",
    "OfficeCalendarProfile",
    "Permission",
    "Role",
    "RoleTreeNode",
]
