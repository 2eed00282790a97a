"""Application entry point and composition root."""

import logging

from falcon.asgi import App
from psycopg_pool import AsyncConnectionPool

from crmrules import __version__
from crmrules.application.use_cases.calendar.get_business_calendar import (
    GetBusinessCalendarUseCase,
)
from crmrules.application.use_cases.deadline.compute_deadline import ComputeDeadlineUseCase
from crmrules.application.use_cases.role.build_role_forest import BuildRoleForestUseCase
from crmrules.application.use_cases.role.change_role_parent import ChangeRoleParentUseCase
from crmrules.application.use_cases.role.create_role import CreateRoleUseCase
from crmrules.application.use_cases.role.delete_role import DeleteRoleUseCase
from crmrules.application.use_cases.role.duplicate_role import DuplicateRoleUseCase
from crmrules.application.use_cases.role.get_role_permissions import GetRolePermissionsUseCase
from crmrules.config import Settings, get_settings
from crmrules.domain.services import RoleInheritanceResolver
from crmrules.infrastructure.permission.permission_checker import RoleBasedPermissionChecker
from crmrules.infrastructure.persistence.postgres.connection import create_pool
from crmrules.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from crmrules.interfaces.api.app import create_app
from crmrules.interfaces.api.middleware.cors import CORSMiddleware
from crmrules.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from crmrules.interfaces.api.middleware.request_logging import RequestLoggingMiddleware
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
from crmrules.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"CRM Rules v{__version__}")


def build_app(
    uow_factory: object,
    settings: Settings,
    pool: AsyncConnectionPool | None = None,
) -> App:
    """Wire use cases and resources around a unit-of-work factory."""
    resolver = RoleInheritanceResolver(strict=settings.strict_role_cycles)
    permission_checker = RoleBasedPermissionChecker(uow_factory, resolver)

    create_role = CreateRoleUseCase(unit_of_work_factory=uow_factory)
    delete_role = DeleteRoleUseCase(unit_of_work_factory=uow_factory)
    duplicate_role = DuplicateRoleUseCase(unit_of_work_factory=uow_factory)
    change_parent = ChangeRoleParentUseCase(unit_of_work_factory=uow_factory, resolver=resolver)
    get_role_permissions = GetRolePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        resolver=resolver,
        max_inheritance_depth=settings.max_inheritance_depth,
    )
    build_forest = BuildRoleForestUseCase(unit_of_work_factory=uow_factory, resolver=resolver)
    compute_deadline = ComputeDeadlineUseCase(
        unit_of_work_factory=uow_factory,
        hours_per_business_day=settings.hours_per_business_day,
    )
    get_calendar = GetBusinessCalendarUseCase(unit_of_work_factory=uow_factory)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    middleware: list = [CORSMiddleware(cors_origins)]
    if pool is not None:
        middleware.append(PoolLifespanMiddleware(pool))
    middleware.append(RequestLoggingMiddleware())

    return create_app(
        health_resource=HealthResource(pool),
        roles_resource=RolesResource(uow_factory, create_role),
        role_resource=RoleResource(uow_factory, delete_role),
        role_duplicate_resource=RoleDuplicateResource(duplicate_role),
        role_parent_resource=RoleParentResource(change_parent),
        role_permissions_resource=RolePermissionsResource(get_role_permissions),
        role_permission_check_resource=RolePermissionCheckResource(permission_checker),
        role_forest_resource=RoleForestResource(build_forest),
        permissions_resource=PermissionsResource(uow_factory),
        offices_resource=OfficesResource(uow_factory),
        office_calendar_resource=OfficeCalendarResource(get_calendar),
        deadlines_resource=DeadlinesResource(compute_deadline),
        middleware=middleware,
    )


def create_crmrules_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    logger.info("Starting CRM Rules v%s (%s)", __version__, settings.environment)
    return build_app(uow_factory, settings, pool)


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_crmrules_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )
