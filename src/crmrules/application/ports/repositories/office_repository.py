"""Office calendar repository port."""

from typing import Protocol

from crmrules.domain.entities import OfficeCalendarProfile


class OfficeRepository(Protocol):
    """Port for office calendar profiles."""

    async def get_by_id(self, office_id: str) -> OfficeCalendarProfile | None: ...

    async def list_all(self) -> list[OfficeCalendarProfile]: ...

    async def create(self, office: OfficeCalendarProfile) -> OfficeCalendarProfile: ...
