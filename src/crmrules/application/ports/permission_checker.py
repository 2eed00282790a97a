"""Permission checker port - RBAC authorization."""

from typing import Protocol


class PermissionChecker(Protocol):
    """Port for checking whether a role holds a permission."""

    async def check(self, role_id: str, permission_id: str) -> bool: ...
