"""Delete role use case."""

import logging

from crmrules.domain.exceptions import DeletionBlocked, NotFound

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role nobody uses and nothing inherits from."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: str) -> None:
        """Delete role. System roles, assigned roles and parents are refused."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            if role.is_system:
                raise DeletionBlocked("Cannot delete system roles")
            if role.user_count > 0:
                raise DeletionBlocked("Cannot delete role with assigned users")

            roles = await uow.roles.list_all()
            dependents = [r for r in roles if r.parent_role_id == role_id]
            if dependents:
                raise DeletionBlocked(
                    f"Cannot delete role. {len(dependents)} roles inherit from it."
                )
            await uow.roles.delete(role_id)

        logger.info("Deleted role %s (%s)", role.id, role.name)
