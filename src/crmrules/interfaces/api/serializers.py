"""JSON (de)serialization of domain objects for the HTTP API."""

from datetime import date
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crmrules.application.dto.calendar_dto import BusinessCalendarOutput
from crmrules.application.dto.deadline_dto import DeadlineComputationResult
from crmrules.application.dto.role_dto import RolePermissionsOutput
from crmrules.domain.entities import (
    BusinessDay,
    EscalationRules,
    Holiday,
    OfficeCalendarProfile,
    Permission,
    Role,
    RoleTreeNode,
)
from crmrules.domain.exceptions import ValidationError
from crmrules.domain.value_objects import TimeWindow, Weekday


def role_to_dict(role: Role) -> dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "description": role.description,
        "level": role.level,
        "department": role.department,
        "parent_role_id": role.parent_role_id,
        "permissions": sorted(role.permissions),
        "inheritance_enabled": role.inheritance_enabled,
        "is_system": role.is_system,
        "user_count": role.user_count,
    }


def tree_node_to_dict(node: RoleTreeNode) -> dict[str, Any]:
    return {
        **role_to_dict(node.role),
        "depth": node.depth,
        "children": [tree_node_to_dict(c) for c in node.children],
    }


def role_permissions_to_dict(out: RolePermissionsOutput) -> dict[str, Any]:
    return {
        "role_id": out.role_id,
        "direct": sorted(out.direct),
        "inherited": sorted(out.inherited),
        "effective": sorted(out.effective),
        "high_risk_count": out.high_risk_count,
        "inheritance_chain": out.inheritance_chain,
        "warnings": out.warnings,
    }


def permission_to_dict(p: Permission) -> dict[str, Any]:
    return {
        "id": p.id,
        "module": p.module,
        "resource": p.resource,
        "action": p.action,
        "risk_level": p.risk_level.value,
        "description": p.description,
    }


def office_to_dict(office: OfficeCalendarProfile) -> dict[str, Any]:
    rules = office.escalation_rules
    return {
        "id": office.id,
        "name": office.name,
        "timezone": office.timezone,
        "business_hours": [
            {
                "day": int(day.weekday),
                "is_working_day": day.is_working_day,
                "start_time": day.window.start_time,
                "end_time": day.window.end_time,
                "lunch_break_start": day.lunch_break.start_time if day.lunch_break else None,
                "lunch_break_end": day.lunch_break.end_time if day.lunch_break else None,
            }
            for _, day in sorted(office.business_hours.items())
        ],
        "holidays": [
            {
                "id": h.id,
                "name": h.name,
                "date": h.date.isoformat(),
                "is_recurring": h.is_recurring,
            }
            for h in office.holidays
        ],
        "escalation_rules": {
            "extend_deadlines_on_weekends": rules.extend_deadlines_on_weekends,
            "extend_deadlines_on_holidays": rules.extend_deadlines_on_holidays,
            "max_extension_days": rules.max_extension_days,
            "fallback_offices": list(rules.fallback_offices),
        },
    }


def parse_office(body: dict[str, Any]) -> OfficeCalendarProfile:
    """Build an office from a request body.

    Raises KeyError for missing fields and ValidationError for bad values.
    """
    timezone = body["timezone"]
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {timezone}") from e

    business_hours: dict[Weekday, BusinessDay] = {}
    for entry in body["business_hours"]:
        try:
            weekday = Weekday(int(entry["day"]))
        except ValueError as e:
            raise ValidationError(f"Invalid weekday: {entry['day']}") from e
        lunch = None
        if entry.get("lunch_break_start") and entry.get("lunch_break_end"):
            lunch = TimeWindow(entry["lunch_break_start"], entry["lunch_break_end"])
        business_hours[weekday] = BusinessDay(
            weekday=weekday,
            is_working_day=bool(entry["is_working_day"]),
            window=TimeWindow(entry.get("start_time", "09:00"), entry.get("end_time", "17:00")),
            lunch_break=lunch,
        )
    missing = set(Weekday) - set(business_hours)
    if missing:
        names = ", ".join(d.name.title() for d in sorted(missing))
        raise ValidationError(f"Business hours missing for: {names}")

    holidays = []
    for h in body.get("holidays") or []:
        try:
            day = date.fromisoformat(h["date"])
        except ValueError as e:
            raise ValidationError(f"Invalid holiday date: {h['date']}") from e
        holidays.append(
            Holiday(
                id=h["id"],
                name=h.get("name", h["id"]),
                date=day,
                is_recurring=bool(h.get("is_recurring", False)),
            )
        )

    rules = body.get("escalation_rules") or {}
    if not isinstance(rules, dict):
        raise ValidationError("escalation_rules must be an object")
    return OfficeCalendarProfile(
        id=body["id"],
        name=body.get("name", body["id"]),
        timezone=timezone,
        business_hours=business_hours,
        holidays=tuple(holidays),
        escalation_rules=EscalationRules(
            extend_deadlines_on_weekends=bool(rules.get("extend_deadlines_on_weekends", True)),
            extend_deadlines_on_holidays=bool(rules.get("extend_deadlines_on_holidays", True)),
            max_extension_days=int(rules.get("max_extension_days", 3)),
            fallback_offices=tuple(rules.get("fallback_offices", ())),
        ),
    )


def deadline_result_to_dict(result: DeadlineComputationResult) -> dict[str, Any]:
    return {
        "office_id": result.office_id,
        "business_days": result.business_days,
        "original_deadline": result.original_deadline.isoformat(),
        "adjusted_deadline": result.adjusted_deadline.isoformat(),
        "was_adjusted": result.was_adjusted,
        "reason": result.reason,
        "extension_days": result.extension_days,
        "cap_exceeded": result.cap_exceeded,
        "fallback_office_id": result.fallback_office_id,
    }


def calendar_to_dict(out: BusinessCalendarOutput) -> dict[str, Any]:
    return {
        "office_id": out.office_id,
        "timezone": out.timezone,
        "business_day_count": out.business_day_count,
        "working_hours": out.working_hours,
        "days": [
            {
                "date": d.date.isoformat(),
                "weekday": d.weekday.name.title(),
                "is_business_day": d.is_business_day,
                "is_holiday": d.is_holiday,
                "holiday_name": d.holiday_name,
                "business_hours": (
                    {
                        "start_time": d.business_hours.start_time,
                        "end_time": d.business_hours.end_time,
                    }
                    if d.business_hours
                    else None
                ),
            }
            for d in out.days
        ],
        "holidays": [
            {
                "id": h.holiday_id,
                "name": h.name,
                "date": h.date.isoformat(),
                "is_recurring": h.is_recurring,
            }
            for h in out.holidays
        ],
    }
