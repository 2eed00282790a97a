"""Deadline computation API resource."""

from datetime import datetime

import falcon.asgi

from crmrules.application.dto.deadline_dto import DeadlineComputationRequest
from crmrules.application.use_cases.deadline.compute_deadline import ComputeDeadlineUseCase
from crmrules.domain.exceptions import ConfigurationError, ValidationError
from crmrules.interfaces.api.serializers import deadline_result_to_dict


class DeadlinesResource:
    """POST /v1/deadlines - compute an office deadline from business hours."""

    def __init__(self, compute_deadline: ComputeDeadlineUseCase) -> None:
        self._compute = compute_deadline

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: submitted_at (ISO 8601), required_business_hours, office_id."""
        try:
            body = await req.get_media()
            request = DeadlineComputationRequest(
                submitted_at=datetime.fromisoformat(body["submitted_at"]),
                required_business_hours=float(body["required_business_hours"]),
                office_id=body["office_id"],
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (ValueError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            result = await self._compute.execute(request)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except ConfigurationError as e:
            resp.status = falcon.HTTP_422
            resp.media = {"error": str(e)}
            return

        resp.media = deadline_result_to_dict(result)
        resp.status = falcon.HTTP_200
