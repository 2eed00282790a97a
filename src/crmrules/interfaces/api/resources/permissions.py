"""Permission catalog API resource."""

import falcon.asgi

from crmrules.interfaces.api.serializers import permission_to_dict


class PermissionsResource:
    """GET /v1/permissions - list the permission catalog."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List permissions, optionally filtered by module or risk level."""
        module = req.get_param("module")
        risk_level = req.get_param("risk_level")

        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()

        if module:
            permissions = [p for p in permissions if p.module == module]
        if risk_level:
            permissions = [p for p in permissions if p.risk_level.value == risk_level]

        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200
