"""Permission entity - catalog entry referenced by roles."""

from dataclasses import dataclass

from crmrules.domain.value_objects import RiskLevel


@dataclass(frozen=True)
class Permission:
    """Permission - action on a module resource, with a risk level."""

    id: str
    module: str
    resource: str
    action: str
    risk_level: RiskLevel = RiskLevel.LOW
    description: str = ""
