"""Role DTOs."""

from dataclasses import dataclass, field


@dataclass
class RoleCreateInput:
    """Input for creating a role."""

    name: str
    description: str = ""
    department: str | None = None
    parent_role_id: str | None = None
    inheritance_enabled: bool = True
    permissions: frozenset[str] = field(default_factory=frozenset)


@dataclass
class RolePermissionsOutput:
    """Direct, inherited and effective permissions of a role."""

    role_id: str
    direct: frozenset[str]
    inherited: frozenset[str]
    effective: frozenset[str]
    high_risk_count: int
    inheritance_chain: list[str]
    warnings: list[str] = field(default_factory=list)
