"""Falcon ASGI application."""

import logging

import falcon.asgi
from falcon.asgi import App

from crmrules.domain.exceptions import CycleDetectedError
from crmrules.interfaces.api.resources.deadlines import DeadlinesResource
from crmrules.interfaces.api.resources.health import HealthResource
from crmrules.interfaces.api.resources.offices import OfficeCalendarResource, OfficesResource
from crmrules.interfaces.api.resources.permissions import PermissionsResource
from crmrules.interfaces.api.resources.roles import (
    RoleDuplicateResource,
    RoleForestResource,
    RoleParentResource,
    RolePermissionCheckResource,
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)

logger = logging.getLogger(__name__)


async def handle_cycle(req, resp, ex, params):
    """Strict-mode cycles surfacing from any resource are a conflict."""
    resp.status = falcon.HTTP_409
    resp.media = {"error": str(ex)}


async def log_exception(req, resp, ex, params):
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    *,
    health_resource: HealthResource,
    roles_resource: RolesResource,
    role_resource: RoleResource,
    role_duplicate_resource: RoleDuplicateResource,
    role_parent_resource: RoleParentResource,
    role_permissions_resource: RolePermissionsResource,
    role_permission_check_resource: RolePermissionCheckResource,
    role_forest_resource: RoleForestResource,
    permissions_resource: PermissionsResource,
    offices_resource: OfficesResource,
    office_calendar_resource: OfficeCalendarResource,
    deadlines_resource: DeadlinesResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])

    app.add_error_handler(Exception, log_exception)
    app.add_error_handler(CycleDetectedError, handle_cycle)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/roles", roles_resource)
    app.add_route("/v1/roles/forest", role_forest_resource)
    app.add_route("/v1/roles/{role_id}", role_resource)
    app.add_route("/v1/roles/{role_id}/duplicate", role_duplicate_resource)
    app.add_route("/v1/roles/{role_id}/parent", role_parent_resource)
    app.add_route("/v1/roles/{role_id}/permissions", role_permissions_resource)
    app.add_route(
        "/v1/roles/{role_id}/permissions/{permission_id}",
        role_permission_check_resource,
    )
    app.add_route("/v1/permissions", permissions_resource)
    app.add_route("/v1/offices", offices_resource)
    app.add_route("/v1/offices/{office_id}/calendar", office_calendar_resource)
    app.add_route("/v1/deadlines", deadlines_resource)
    return app
