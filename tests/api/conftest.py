"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from crmrules.config import Settings
from crmrules.main import build_app

from tests.conftest import PERMISSION_CATALOG, FakeUnitOfWork, make_factory, make_role


@pytest.fixture
def api_uow() -> FakeUnitOfWork:
    """Shared UoW for all requests in a test, seeded with a small hierarchy."""
    uow = FakeUnitOfWork()
    uow.roles.add_role(make_role("admin", {"sys_roles", "fin_edit"}, level=1, is_system=True))
    uow.roles.add_role(make_role("manager", {"fin_view"}, "admin", level=2))
    uow.roles.add_role(make_role("rep", {"hr_view"}, "manager", level=3))
    for p in PERMISSION_CATALOG:
        uow.permissions.add_permission(p)
    return uow


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, cors_origins="*")


@pytest.fixture
def app(api_uow, settings):
    """Falcon ASGI app wired to in-memory repositories."""
    return build_app(make_factory(api_uow), settings)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


def office_body(office_id: str = "nyc", **overrides) -> dict:
    """Mon-Fri 09:00-17:00 office with lunch and a recurring July 4th."""
    body = {
        "id": office_id,
        "name": "New York",
        "timezone": "America/New_York",
        "business_hours": [
            {
                "day": day,
                "is_working_day": 1 <= day <= 5,
                "start_time": "09:00",
                "end_time": "17:00",
                "lunch_break_start": "12:00",
                "lunch_break_end": "13:00",
            }
            for day in range(7)
        ],
        "holidays": [
            {"id": "july4", "name": "Independence Day", "date": "2020-07-04", "is_recurring": True}
        ],
        "escalation_rules": {"max_extension_days": 3},
    }
    body.update(overrides)
    return body
