"""Create role use case."""

import logging
from uuid import uuid4

from crmrules.application.dto.role_dto import RoleCreateInput
from crmrules.domain.entities import Role
from crmrules.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create a non-system role, placed one level below its parent."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, data: RoleCreateInput) -> Role:
        """Create role. Level is parent level + 1, or one past the deepest level."""
        async with self._uow_factory() as uow:
            if data.parent_role_id:
                parent = await uow.roles.get_by_id(data.parent_role_id)
                if not parent:
                    raise NotFound("Role", data.parent_role_id)
                level = parent.level + 1
            else:
                roles = await uow.roles.list_all()
                level = max([r.level for r in roles], default=0) + 1

            role = Role(
                id=str(uuid4()),
                name=(data.name or "").strip(),
                description=data.description,
                level=level,
                permissions=data.permissions,
                parent_role_id=data.parent_role_id,
                inheritance_enabled=data.inheritance_enabled,
                department=data.department,
            )
            await uow.roles.create(role)

        logger.info("Created role %s (%s) at level %d", role.id, role.name, role.level)
        return role
