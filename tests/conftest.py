"""Pytest fixtures for crmrules tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

import pytest

from crmrules.domain.entities import (
    BusinessDay,
    EscalationRules,
    Holiday,
    OfficeCalendarProfile,
    Permission,
    Role,
)
from crmrules.domain.value_objects import RiskLevel, TimeWindow, Weekday


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Role] = {}

    def add_role(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def get_by_id(self, role_id: str) -> Role | None:
        return self._by_id.get(role_id)

    async def list_all(self) -> list[Role]:
        return list(self._by_id.values())

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def delete(self, role_id: str) -> None:
        self._by_id.pop(role_id, None)


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(self) -> None:
        self._by_id: dict[str, Permission] = {}

    def add_permission(self, permission: Permission) -> None:
        self._by_id[permission.id] = permission

    async def get_by_id(self, permission_id: str) -> Permission | None:
        return self._by_id.get(permission_id)

    async def list_all(self) -> list[Permission]:
        return sorted(self._by_id.values(), key=lambda p: (p.module, p.resource, p.action))


class FakeOfficeRepository:
    """In-memory office calendar repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, OfficeCalendarProfile] = {}

    def add_office(self, office: OfficeCalendarProfile) -> None:
        self._by_id[office.id] = office

    async def get_by_id(self, office_id: str) -> OfficeCalendarProfile | None:
        return self._by_id.get(office_id)

    async def list_all(self) -> list[OfficeCalendarProfile]:
        return [self._by_id[k] for k in sorted(self._by_id)]

    async def create(self, office: OfficeCalendarProfile) -> OfficeCalendarProfile:
        self._by_id[office.id] = office
        return office


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.permissions = FakePermissionRepository()
        self.offices = FakeOfficeRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def make_role(
    role_id: str,
    permissions: set[str] | None = None,
    parent: str | None = None,
    *,
    level: int = 1,
    name: str | None = None,
    inheritance_enabled: bool = True,
    is_system: bool = False,
    user_count: int = 0,
) -> Role:
    return Role(
        id=role_id,
        name=name or role_id.title(),
        description="",
        level=level,
        permissions=frozenset(permissions or ()),
        parent_role_id=parent,
        inheritance_enabled=inheritance_enabled,
        is_system=is_system,
        user_count=user_count,
    )


def make_office(
    office_id: str = "nyc",
    *,
    timezone: str = "America/New_York",
    working_days: tuple[Weekday, ...] = (
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
    ),
    holidays: tuple[Holiday, ...] = (),
    rules: EscalationRules | None = None,
    lunch: bool = True,
) -> OfficeCalendarProfile:
    """Office with 09:00-17:00 hours (12:00-13:00 lunch) on working_days."""
    return OfficeCalendarProfile(
        id=office_id,
        name=office_id.upper(),
        timezone=timezone,
        business_hours={
            wd: BusinessDay(
                weekday=wd,
                is_working_day=wd in working_days,
                window=TimeWindow("09:00", "17:00"),
                lunch_break=TimeWindow("12:00", "13:00") if lunch else None,
            )
            for wd in Weekday
        },
        holidays=holidays,
        escalation_rules=rules or EscalationRules(),
    )


PERMISSION_CATALOG = (
    Permission("fin_view", "Finance", "Financial Reports", "View", RiskLevel.LOW),
    Permission("fin_edit", "Finance", "Financial Records", "Edit", RiskLevel.HIGH),
    Permission("hr_view", "HR", "Employee Records", "View", RiskLevel.MEDIUM),
    Permission("hr_salary", "HR", "Salary Information", "View", RiskLevel.HIGH),
    Permission("sys_roles", "System", "Role Management", "Manage", RiskLevel.HIGH),
)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def nyc_office() -> OfficeCalendarProfile:
    """Mon-Fri office in New York with Independence Day as a recurring holiday."""
    return make_office(
        holidays=(Holiday("independence", "Independence Day", date(2020, 7, 4), is_recurring=True),),
    )
