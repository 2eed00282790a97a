"""Role API resources."""

import falcon.asgi

from crmrules.application.dto.role_dto import RoleCreateInput
from crmrules.application.ports import PermissionChecker
from crmrules.application.use_cases.role.build_role_forest import BuildRoleForestUseCase
from crmrules.application.use_cases.role.change_role_parent import ChangeRoleParentUseCase
from crmrules.application.use_cases.role.create_role import CreateRoleUseCase
from crmrules.application.use_cases.role.delete_role import DeleteRoleUseCase
from crmrules.application.use_cases.role.duplicate_role import DuplicateRoleUseCase
from crmrules.application.use_cases.role.get_role_permissions import GetRolePermissionsUseCase
from crmrules.domain.exceptions import (
    CycleDetectedError,
    DeletionBlocked,
    NotFound,
    ValidationError,
)
from crmrules.interfaces.api.serializers import (
    role_permissions_to_dict,
    role_to_dict,
    tree_node_to_dict,
)


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(self, unit_of_work_factory: type, create_role: CreateRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles ordered by level then name."""
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        roles.sort(key=lambda r: (r.level, r.name))
        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role."""
        try:
            body = await req.get_media()
            permissions = body.get("permissions") or []
            if not isinstance(permissions, list) or not all(
                isinstance(p, str) for p in permissions
            ):
                raise ValidationError("permissions must be a list of permission ids")
            data = RoleCreateInput(
                name=body["name"],
                description=body.get("description", ""),
                department=body.get("department") or None,
                parent_role_id=body.get("parent_role_id") or None,
                inheritance_enabled=bool(body.get("inheritance_enabled", True)),
                permissions=frozenset(permissions),
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            role = await self._create.execute(data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/DELETE /v1/roles/{role_id}."""

    def __init__(self, unit_of_work_factory: type, delete_role: DeleteRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        try:
            await self._delete.execute(role_id)
            resp.status = falcon.HTTP_204
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
        except DeletionBlocked as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}


class RoleDuplicateResource:
    """POST /v1/roles/{role_id}/duplicate - copy a role."""

    def __init__(self, duplicate_role: DuplicateRoleUseCase) -> None:
        self._duplicate = duplicate_role

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        try:
            copy = await self._duplicate.execute(role_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        resp.media = role_to_dict(copy)
        resp.status = falcon.HTTP_201


class RoleParentResource:
    """PUT /v1/roles/{role_id}/parent - move role in the hierarchy."""

    def __init__(self, change_parent: ChangeRoleParentUseCase) -> None:
        self._change_parent = change_parent

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        try:
            body = await req.get_media()
            parent_role_id = (body or {}).get("parent_role_id") or None
            if parent_role_id is not None and not isinstance(parent_role_id, str):
                raise ValidationError("parent_role_id must be a role id or null")
        except (ValidationError, KeyError, ValueError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return
        try:
            role = await self._change_parent.execute(role_id, parent_role_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except CycleDetectedError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200


class RolePermissionsResource:
    """GET /v1/roles/{role_id}/permissions - direct, inherited and effective."""

    def __init__(self, get_role_permissions: GetRolePermissionsUseCase) -> None:
        self._get_permissions = get_role_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        try:
            out = await self._get_permissions.execute(role_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        except CycleDetectedError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        resp.media = role_permissions_to_dict(out)
        resp.status = falcon.HTTP_200


class RolePermissionCheckResource:
    """GET /v1/roles/{role_id}/permissions/{permission_id} - does the role hold it."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
        permission_id: str,
    ) -> None:
        granted = await self._permission_checker.check(role_id, permission_id)
        resp.media = {"role_id": role_id, "permission_id": permission_id, "granted": granted}
        resp.status = falcon.HTTP_200


class RoleForestResource:
    """GET /v1/roles/forest - role hierarchy as nested trees."""

    def __init__(self, build_forest: BuildRoleForestUseCase) -> None:
        self._build_forest = build_forest

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        forest = await self._build_forest.execute()
        resp.media = {"items": [tree_node_to_dict(n) for n in forest]}
        resp.status = falcon.HTTP_200
