"""Role entity for RBAC."""

from dataclasses import dataclass, field

from crmrules.domain.exceptions import ValidationError


@dataclass
class Role:
    """Named permission bundle; may inherit from a parent role."""

    id: str
    name: str
    description: str
    level: int
    permissions: frozenset[str] = field(default_factory=frozenset)
    parent_role_id: str | None = None
    inheritance_enabled: bool = True
    is_system: bool = False
    user_count: int = 0
    department: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Role name is required")
        if self.user_count < 0:
            raise ValidationError("Role user_count cannot be negative")
        self.permissions = frozenset(self.permissions)


@dataclass
class RoleTreeNode:
    """Role placed in the display forest."""

    role: Role
    depth: int = 0
    children: list["RoleTreeNode"] = field(default_factory=list)
