"""Duplicate role use case."""

import logging
from dataclasses import replace
from uuid import uuid4

from crmrules.domain.entities import Role
from crmrules.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class DuplicateRoleUseCase:
    """Copy a role; the copy is never a system role and has no users."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: str) -> Role:
        async with self._uow_factory() as uow:
            source = await uow.roles.get_by_id(role_id)
            if not source:
                raise NotFound("Role", role_id)
            copy = replace(
                source,
                id=str(uuid4()),
                name=f"{source.name} (Copy)",
                user_count=0,
                is_system=False,
            )
            await uow.roles.create(copy)

        logger.info("Duplicated role %s as %s", source.id, copy.id)
        return copy
