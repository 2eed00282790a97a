"""Build the role hierarchy forest."""

from crmrules.domain.entities import RoleTreeNode
from crmrules.domain.services import RoleInheritanceResolver


class BuildRoleForestUseCase:
    """Group all roles into parent/child trees for display."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: RoleInheritanceResolver | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver or RoleInheritanceResolver()

    async def execute(self) -> list[RoleTreeNode]:
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        return self._resolver.build_role_forest(roles)
