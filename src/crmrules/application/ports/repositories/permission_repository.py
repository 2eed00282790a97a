"""Permission catalog repository port."""

from typing import Protocol

from crmrules.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for the read-only permission catalog."""

    async def get_by_id(self, permission_id: str) -> Permission | None: ...

    async def list_all(self) -> list[Permission]: ...
