"""PostgreSQL office calendar repository implementation."""

from collections import defaultdict

from psycopg import AsyncConnection

from crmrules.domain.entities import (
    BusinessDay,
    EscalationRules,
    Holiday,
    OfficeCalendarProfile,
)
from crmrules.domain.value_objects import TimeWindow, Weekday


def _row_to_business_day(r: tuple) -> BusinessDay:
    # r: office_id, weekday, is_working_day, start_time, end_time, lunch_start, lunch_end
    return BusinessDay(
        weekday=Weekday(r[1]),
        is_working_day=r[2],
        window=TimeWindow(r[3], r[4]),
        lunch_break=TimeWindow(r[5], r[6]) if r[5] and r[6] else None,
    )


def _row_to_holiday(r: tuple) -> Holiday:
    # r: office_id, id, name, date, is_recurring
    return Holiday(id=r[1], name=r[2], date=r[3], is_recurring=r[4])


class PostgresOfficeRepository:
    """Office calendar repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, office_id: str) -> OfficeCalendarProfile | None:
        """Get office with business hours and holidays."""
        offices = await self._load("WHERE id = %s", (office_id,))
        return offices[0] if offices else None

    async def list_all(self) -> list[OfficeCalendarProfile]:
        """List all offices."""
        return await self._load("", ())

    async def _load(self, where: str, params: tuple) -> list[OfficeCalendarProfile]:
        cur = await self._conn.execute(
            "SELECT id, name, timezone, extend_deadlines_on_weekends, "
            "extend_deadlines_on_holidays, max_extension_days, fallback_offices "
            f"FROM office {where} ORDER BY id",
            params,
        )
        office_rows = await cur.fetchall()
        if not office_rows:
            return []
        ids = [r[0] for r in office_rows]

        cur = await self._conn.execute(
            "SELECT office_id, weekday, is_working_day, start_time, end_time, "
            "lunch_start, lunch_end FROM office_business_day WHERE office_id = ANY(%s)",
            (ids,),
        )
        hours: dict[str, dict[Weekday, BusinessDay]] = defaultdict(dict)
        for r in await cur.fetchall():
            day = _row_to_business_day(r)
            hours[r[0]][day.weekday] = day

        cur = await self._conn.execute(
            "SELECT office_id, id, name, date, is_recurring FROM office_holiday "
            "WHERE office_id = ANY(%s) ORDER BY date",
            (ids,),
        )
        holidays: dict[str, list[Holiday]] = defaultdict(list)
        for r in await cur.fetchall():
            holidays[r[0]].append(_row_to_holiday(r))

        return [
            OfficeCalendarProfile(
                id=r[0],
                name=r[1],
                timezone=r[2],
                business_hours=hours[r[0]],
                holidays=tuple(holidays[r[0]]),
                escalation_rules=EscalationRules(
                    extend_deadlines_on_weekends=r[3],
                    extend_deadlines_on_holidays=r[4],
                    max_extension_days=r[5],
                    fallback_offices=tuple(r[6] or ()),
                ),
            )
            for r in office_rows
        ]

    async def create(self, office: OfficeCalendarProfile) -> OfficeCalendarProfile:
        """Create office with its weekly template and holidays."""
        rules = office.escalation_rules
        await self._conn.execute(
            "INSERT INTO office (id, name, timezone, extend_deadlines_on_weekends, "
            "extend_deadlines_on_holidays, max_extension_days, fallback_offices) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                office.id,
                office.name,
                office.timezone,
                rules.extend_deadlines_on_weekends,
                rules.extend_deadlines_on_holidays,
                rules.max_extension_days,
                list(rules.fallback_offices),
            ),
        )
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO office_business_day (office_id, weekday, is_working_day, "
                "start_time, end_time, lunch_start, lunch_end) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                [
                    (
                        office.id,
                        int(day.weekday),
                        day.is_working_day,
                        day.window.start_time,
                        day.window.end_time,
                        day.lunch_break.start_time if day.lunch_break else None,
                        day.lunch_break.end_time if day.lunch_break else None,
                    )
                    for day in office.business_hours.values()
                ],
            )
            if office.holidays:
                await cur.executemany(
                    "INSERT INTO office_holiday (office_id, id, name, date, is_recurring) "
                    "VALUES (%s, %s, %s, %s, %s)",
                    [
                        (office.id, h.id, h.name, h.date, h.is_recurring)
                        for h in office.holidays
                    ],
                )
        return office
