"""Change role parent use case."""

import logging

from crmrules.domain.entities import Role
from crmrules.domain.exceptions import CycleDetectedError, NotFound
from crmrules.domain.services import RoleInheritanceResolver

logger = logging.getLogger(__name__)


class ChangeRoleParentUseCase:
    """Move a role under a new parent (or make it a root) without closing a cycle."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolver: RoleInheritanceResolver | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver or RoleInheritanceResolver()

    async def execute(self, role_id: str, parent_role_id: str | None) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            if parent_role_id:
                parent = await uow.roles.get_by_id(parent_role_id)
                if not parent:
                    raise NotFound("Role", parent_role_id)
                roles = await uow.roles.list_all()
                if self._resolver.would_create_cycle(role_id, parent_role_id, roles):
                    raise CycleDetectedError([role_id, parent_role_id, role_id])
            role.parent_role_id = parent_role_id
            await uow.roles.update(role)

        logger.info("Role %s parent set to %s", role_id, parent_role_id)
        return role
