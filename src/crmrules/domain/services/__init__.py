"""Domain services - pure computations over snapshots."""

from crmrules.domain.services.business_calendar import BusinessDeadlineCalculator
from crmrules.domain.services.role_inheritance import RoleInheritanceResolver, RoleStats

__all__ = [
    "BusinessDeadlineCalculator",
    "RoleInheritanceResolver",
    "RoleStats",
]
