"""PostgreSQL permission catalog repository implementation."""

from psycopg import AsyncConnection

from crmrules.domain.entities import Permission
from crmrules.domain.value_objects import RiskLevel


class PostgresPermissionRepository:
    """Permission catalog repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            "SELECT id, module, resource, action, risk_level, description "
            "FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Permission(
            id=r[0],
            module=r[1],
            resource=r[2],
            action=r[3],
            risk_level=RiskLevel(r[4]),
            description=r[5] or "",
        )

    async def list_all(self) -> list[Permission]:
        """List the permission catalog."""
        cur = await self._conn.execute(
            "SELECT id, module, resource, action, risk_level, description "
            "FROM permission ORDER BY module, resource, action"
        )
        rows = await cur.fetchall()
        return [
            Permission(
                id=r[0],
                module=r[1],
                resource=r[2],
                action=r[3],
                risk_level=RiskLevel(r[4]),
                description=r[5] or "",
            )
            for r in rows
        ]
