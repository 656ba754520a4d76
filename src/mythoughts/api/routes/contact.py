"""Contact form endpoint."""

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from mythoughts.api.models import ContactRequest, ContactResponse
from mythoughts.metrics import contact_messages

logger = structlog.get_logger()
router = APIRouter(tags=["contact"])

INCOMPLETE_MESSAGE = "All fields are required."


async def read_submission(request: Request) -> ContactRequest:
    """Parse the body leniently; anything unreadable counts as empty."""
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        body = {}
    return ContactRequest.model_validate(body)


@router.post(
    "/contact",
    response_model=ContactResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ContactRequest.model_json_schema()}},
        }
    },
)
async def submit_contact(request: Request) -> ContactResponse | JSONResponse:
    """Accept a contact form submission.

    No mail is sent; the submission is written to the log. Every
    failure answers with a ``{message}`` body.
    """
    contact_request = await read_submission(request)
    if not contact_request.is_complete():
        logger.info("contact_submission_incomplete")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": INCOMPLETE_MESSAGE},
        )

    try:
        logger.info(
            "contact_submission_received",
            name=contact_request.name,
            email=contact_request.email,
            subject=contact_request.subject,
            message=contact_request.message,
        )
        contact_messages.inc()
    except Exception as e:
        logger.exception("contact_error", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )

    return ContactResponse()
