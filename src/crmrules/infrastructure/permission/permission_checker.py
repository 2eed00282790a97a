"""Permission checker implementation - resolves role inheritance."""

from crmrules.domain.services import RoleInheritanceResolver


class RoleBasedPermissionChecker:
    """Checks a permission against a role's effective permission set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: RoleInheritanceResolver | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver or RoleInheritanceResolver()

    async def check(self, role_id: str, permission_id: str) -> bool:
        """Check if role holds permission directly or by inheritance."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                return False
            if permission_id in role.permissions:
                return True
            roles = await uow.roles.list_all()

        return permission_id in self._resolver.get_inherited_permissions(role, roles)
