"""Office calendar API resources."""

from datetime import date, timedelta

import falcon.asgi

from crmrules.application.use_cases.calendar.get_business_calendar import (
    GetBusinessCalendarUseCase,
)
from crmrules.domain.exceptions import ConfigurationError, ValidationError
from crmrules.interfaces.api.serializers import calendar_to_dict, office_to_dict, parse_office


class OfficesResource:
    """GET/POST /v1/offices - list and register office calendars."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            offices = await uow.offices.list_all()
        resp.media = {"items": [office_to_dict(o) for o in offices]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Register office calendar. All seven weekdays must be configured."""
        try:
            body = await req.get_media()
            office = parse_office(body)
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        async with self._uow_factory() as uow:
            if await uow.offices.get_by_id(office.id):
                resp.status = falcon.HTTP_409
                resp.media = {"error": f"Office {office.id} already exists"}
                return
            await uow.offices.create(office)

        resp.media = office_to_dict(office)
        resp.status = falcon.HTTP_201


class OfficeCalendarResource:
    """GET /v1/offices/{office_id}/calendar?start=YYYY-MM-DD&end=YYYY-MM-DD."""

    def __init__(self, get_calendar: GetBusinessCalendarUseCase) -> None:
        self._get_calendar = get_calendar

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, office_id: str
    ) -> None:
        """Calendar for the range; defaults to 30 days from today."""
        try:
            start = req.get_param_as_date("start") or date.today()
            end = req.get_param_as_date("end") or start + timedelta(days=30)
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "start and end must be YYYY-MM-DD"}
            return

        try:
            out = await self._get_calendar.execute(office_id, start, end)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except ConfigurationError as e:
            resp.status = falcon.HTTP_422
            resp.media = {"error": str(e)}
            return

        resp.media = calendar_to_dict(out)
        resp.status = falcon.HTTP_200
