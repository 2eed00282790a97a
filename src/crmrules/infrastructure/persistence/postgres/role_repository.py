"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection

from crmrules.domain.entities import Role

_SELECT = (
    "SELECT r.id, r.name, r.description, r.level, r.parent_role_id, "
    "r.inheritance_enabled, r.is_system, r.user_count, r.department, "
    "COALESCE(array_agg(rp.permission_id) FILTER (WHERE rp.permission_id IS NOT NULL), '{}') "
    "FROM role r LEFT JOIN role_permission rp ON rp.role_id = r.id "
)


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        level=r[3],
        parent_role_id=r[4],
        inheritance_enabled=r[5],
        is_system=r[6],
        user_count=r[7],
        department=r[8],
        permissions=frozenset(r[9]),
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            _SELECT + "WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(_SELECT + "GROUP BY r.id")
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def create(self, role: Role) -> Role:
        """Create role with its direct permissions."""
        await self._conn.execute(
            "INSERT INTO role (id, name, description, level, parent_role_id, "
            "inheritance_enabled, is_system, user_count, department) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                role.id,
                role.name,
                role.description,
                role.level,
                role.parent_role_id,
                role.inheritance_enabled,
                role.is_system,
                role.user_count,
                role.department,
            ),
        )
        await self._replace_permissions(role)
        return role

    async def update(self, role: Role) -> None:
        """Update role and replace its direct permissions."""
        await self._conn.execute(
            "UPDATE role SET name=%s, description=%s, level=%s, parent_role_id=%s, "
            "inheritance_enabled=%s, user_count=%s, department=%s WHERE id=%s",
            (
                role.name,
                role.description,
                role.level,
                role.parent_role_id,
                role.inheritance_enabled,
                role.user_count,
                role.department,
                role.id,
            ),
        )
        await self._replace_permissions(role)

    async def delete(self, role_id: str) -> None:
        """Delete role (role_permission rows cascade)."""
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))

    async def _replace_permissions(self, role: Role) -> None:
        await self._conn.execute("DELETE FROM role_permission WHERE role_id = %s", (role.id,))
        if role.permissions:
            async with self._conn.cursor() as cur:
                await cur.executemany(
                    "INSERT INTO role_permission (role_id, permission_id) VALUES (%s, %s)",
                    [(role.id, p) for p in sorted(role.permissions)],
                )
