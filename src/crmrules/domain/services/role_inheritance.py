"""Role inheritance resolution over an immutable snapshot of roles.

Permissions flow from a parent role to a child only across edges where the
child has ``inheritance_enabled``. Parents that do not resolve are treated as
absent (logged, never raised). Every walk tracks the roles already visited, so
cyclic data terminates after at most ``len(all_roles)`` steps.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from crmrules.domain.entities import Permission, Role, RoleTreeNode
from crmrules.domain.exceptions import CycleDetectedError
from crmrules.domain.value_objects import RiskLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleStats:
    """Permission counts for a role."""

    total_permissions: int
    direct_permissions: int
    inherited_permissions: int
    high_risk_permissions: int


def _index(all_roles: Iterable[Role]) -> dict[str, Role]:
    return {r.id: r for r in all_roles}


class RoleInheritanceResolver:
    """Computes direct, inherited and effective permissions of roles.

    With ``strict=True`` a revisited role raises CycleDetectedError; otherwise
    the walk stops at the revisit and returns what was accumulated so far.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def _ancestors(
        self, role: Role, by_id: dict[str, Role], strict: bool | None = None
    ) -> list[Role]:
        """Parents reached through enabled edges, nearest first."""
        strict = self._strict if strict is None else strict
        ancestors: list[Role] = []
        path = [role.id]
        current = role
        while current.inheritance_enabled and current.parent_role_id:
            parent = by_id.get(current.parent_role_id)
            if parent is None:
                logger.warning(
                    "Role %s references missing parent %s; treated as root",
                    current.id,
                    current.parent_role_id,
                )
                break
            if parent.id in path:
                if strict:
                    raise CycleDetectedError(path + [parent.id])
                logger.warning(
                    "Circular inheritance at role %s: %s",
                    role.id,
                    " -> ".join(path + [parent.id]),
                )
                break
            ancestors.append(parent)
            path.append(parent.id)
            current = parent
        return ancestors

    def get_inherited_permissions(
        self, role: Role, all_roles: Iterable[Role]
    ) -> frozenset[str]:
        """Permissions granted to the role through its enabled ancestors."""
        inherited: set[str] = set()
        for ancestor in self._ancestors(role, _index(all_roles)):
            inherited |= ancestor.permissions
        return frozenset(inherited)

    def get_effective_permissions(
        self, role: Role, all_roles: Iterable[Role]
    ) -> frozenset[str]:
        """Direct permissions united with inherited ones."""
        return role.permissions | self.get_inherited_permissions(role, all_roles)

    def get_high_risk_permission_count(
        self,
        role: Role,
        all_roles: Iterable[Role],
        permission_catalog: Iterable[Permission],
    ) -> int:
        """Number of effective permissions the catalog marks as high risk."""
        risk = {p.id: p.risk_level for p in permission_catalog}
        return sum(
            1
            for perm_id in self.get_effective_permissions(role, all_roles)
            if risk.get(perm_id) == RiskLevel.HIGH
        )

    def get_role_stats(
        self,
        role: Role,
        all_roles: Iterable[Role],
        permission_catalog: Iterable[Permission],
    ) -> RoleStats:
        roles = list(all_roles)
        inherited = self.get_inherited_permissions(role, roles)
        return RoleStats(
            total_permissions=len(role.permissions | inherited),
            direct_permissions=len(role.permissions),
            inherited_permissions=len(inherited),
            high_risk_permissions=self.get_high_risk_permission_count(
                role, roles, permission_catalog
            ),
        )

    def get_inheritance_chain(self, role: Role, all_roles: Iterable[Role]) -> list[str]:
        """Ancestor ids along enabled edges, nearest first."""
        return [a.id for a in self._ancestors(role, _index(all_roles))]

    def build_role_forest(self, all_roles: Iterable[Role]) -> list[RoleTreeNode]:
        """Group roles into trees by resolvable parent, sorted by (level, name)."""
        roles = list(all_roles)
        by_id = _index(roles)
        nodes = {r.id: RoleTreeNode(role=r) for r in roles}

        roots: list[RoleTreeNode] = []
        for role in by_id.values():
            node = nodes[role.id]
            if role.parent_role_id and role.parent_role_id in by_id:
                nodes[role.parent_role_id].children.append(node)
            else:
                roots.append(node)

        def _sort(level: list[RoleTreeNode]) -> None:
            level.sort(key=lambda n: (n.role.level, n.role.name))

        _sort(roots)
        placed = 0
        stack = [(node, 0) for node in roots]
        while stack:
            node, depth = stack.pop()
            node.depth = depth
            placed += 1
            _sort(node.children)
            stack.extend((child, depth + 1) for child in node.children)

        if placed < len(by_id):
            logger.warning(
                "%d role(s) unreachable from any root (parent cycle): %s",
                len(by_id) - placed,
                sorted(self.find_cycle_members(roles, enabled_only=False)),
            )
        return roots

    def find_cycle_members(
        self, all_roles: Iterable[Role], enabled_only: bool = True
    ) -> set[str]:
        """Ids of roles lying on a parent cycle."""
        by_id = _index(all_roles)
        done: set[str] = set()
        members: set[str] = set()
        for start in by_id:
            path: list[str] = []
            on_path: set[str] = set()
            current = by_id.get(start)
            while current is not None and current.id not in done:
                if current.id in on_path:
                    members.update(path[path.index(current.id):])
                    break
                path.append(current.id)
                on_path.add(current.id)
                if enabled_only and not current.inheritance_enabled:
                    break
                current = by_id.get(current.parent_role_id or "")
            done.update(path)
        return members

    def find_unresolved_parents(self, all_roles: Iterable[Role]) -> list[Role]:
        """Roles whose declared parent is not in the snapshot."""
        roles = list(all_roles)
        by_id = _index(roles)
        return [r for r in roles if r.parent_role_id and r.parent_role_id not in by_id]

    def would_create_cycle(
        self, role_id: str, new_parent_id: str, all_roles: Iterable[Role]
    ) -> bool:
        """True if making new_parent_id the parent of role_id closes a loop."""
        by_id = _index(all_roles)
        seen: set[str] = set()
        current_id: str | None = new_parent_id
        while current_id and current_id not in seen:
            if current_id == role_id:
                return True
            seen.add(current_id)
            parent = by_id.get(current_id)
            current_id = parent.parent_role_id if parent else None
        return False

    def validate_inheritance(
        self, role: Role, all_roles: Iterable[Role], max_depth: int = 5
    ) -> list[str]:
        """Human-readable problems with the role's inheritance setup."""
        roles = list(all_roles)
        by_id = _index(roles)
        errors: list[str] = []
        if role.id in self.find_cycle_members(roles):
            errors.append("Circular inheritance detected")
        chain = self._ancestors(role, by_id, strict=False)
        if len(chain) > max_depth:
            errors.append(f"Inheritance chain too deep (max {max_depth} levels)")
        if role.parent_role_id and role.parent_role_id not in by_id:
            errors.append(f"Parent role {role.parent_role_id} does not exist")
        return errors
