"""Get effective permissions of a role."""

from crmrules.application.dto.role_dto import RolePermissionsOutput
from crmrules.domain.exceptions import NotFound
from crmrules.domain.services import RoleInheritanceResolver


class GetRolePermissionsUseCase:
    """Resolve direct, inherited and effective permissions for one role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: RoleInheritanceResolver | None = None,
        max_inheritance_depth: int = 5,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver or RoleInheritanceResolver()
        self._max_depth = max_inheritance_depth

    async def execute(self, role_id: str) -> RolePermissionsOutput:
        """Resolve permissions against the current role snapshot."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            roles = await uow.roles.list_all()
            catalog = await uow.permissions.list_all()

        inherited = self._resolver.get_inherited_permissions(role, roles)
        return RolePermissionsOutput(
            role_id=role.id,
            direct=role.permissions,
            inherited=inherited,
            effective=role.permissions | inherited,
            high_risk_count=self._resolver.get_high_risk_permission_count(
                role, roles, catalog
            ),
            inheritance_chain=self._resolver.get_inheritance_chain(role, roles),
            warnings=self._resolver.validate_inheritance(role, roles, self._max_depth),
        )
