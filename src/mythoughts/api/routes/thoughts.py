"""Thought management API endpoints."""

import structlog
from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from mythoughts.api.dependencies import get_owner_id, get_repository, get_scope_owner_id
from mythoughts.api.models import (
    CreateThoughtRequest,
    ErrorResponse,
    ThoughtEnvelope,
    ThoughtListEnvelope,
    ThoughtResponse,
    UpdateThoughtRequest,
)
from mythoughts.domain import InvalidIdentifier, NotFound, ThoughtRepository, ValidationError

logger = structlog.get_logger()

router = APIRouter(
    prefix="/thoughts",
    tags=["thoughts"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{success: false, message}`` error body."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(exclude_none=True),
    )


@router.post(
    "",
    response_model=ThoughtEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_thought(
    create_request: CreateThoughtRequest,
    owner_id: str = Depends(get_owner_id),  # noqa: B008
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> ThoughtEnvelope | JSONResponse:
    """Create a thought owned by the caller."""
    logger.info(
        "creating_thought",
        owner_id=owner_id,
        content_length=len(create_request.content or ""),
    )

    try:
        thought = await repository.create(owner_id, create_request.content)
    except ValidationError as e:
        logger.warning("create_validation_error", owner_id=owner_id, error=str(e))
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.exception("create_error", owner_id=owner_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )

    logger.info("thought_created", owner_id=owner_id, thought_id=thought.id)
    return ThoughtEnvelope(data=ThoughtResponse.from_thought(thought))


@router.get("", response_model=ThoughtListEnvelope, responses=ERROR_RESPONSES)
async def list_thoughts(
    owner_id: str = Depends(get_owner_id),  # noqa: B008
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> ThoughtListEnvelope | JSONResponse:
    """List the caller's thoughts, most recent first."""
    try:
        thoughts = await repository.list_by_owner(owner_id)
    except Exception as e:
        logger.exception("list_error", owner_id=owner_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )

    logger.info("thoughts_listed", owner_id=owner_id, count=len(thoughts))
    return ThoughtListEnvelope(
        data=[ThoughtResponse.from_thought(t) for t in thoughts]
    )


@router.get("/{thought_id}", response_model=ThoughtResponse, responses=ERROR_RESPONSES)
async def get_thought(
    thought_id: str = Path(..., description="Thought id"),
    scope_owner_id: str | None = Depends(get_scope_owner_id),  # noqa: B008
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> ThoughtResponse | JSONResponse:
    """Fetch a single thought.

    Unlike the other endpoints the thought is returned bare, without
    the ``{success, data}`` envelope.
    """
    try:
        thought = await repository.get(thought_id, owner_id=scope_owner_id)
    except InvalidIdentifier as e:
        logger.info("invalid_thought_id", method="GET", thought_id=thought_id)
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except NotFound as e:
        logger.info("thought_not_found", method="GET", thought_id=thought_id)
        return error_response(status.HTTP_404_NOT_FOUND, str(e))
    except Exception as e:
        logger.exception("get_error", thought_id=thought_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )

    logger.info("thought_fetched", thought_id=thought_id)
    return ThoughtResponse.from_thought(thought)


@router.put("/{thought_id}", response_model=ThoughtEnvelope, responses=ERROR_RESPONSES)
async def update_thought(
    update_request: UpdateThoughtRequest,
    thought_id: str = Path(..., description="Thought id"),
    scope_owner_id: str | None = Depends(get_scope_owner_id),  # noqa: B008
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> ThoughtEnvelope | JSONResponse:
    """Replace the content of a thought."""
    try:
        thought = await repository.update_content(
            thought_id, update_request.content, owner_id=scope_owner_id
        )
    except InvalidIdentifier as e:
        logger.info("invalid_thought_id", method="PUT", thought_id=thought_id)
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except ValidationError as e:
        logger.warning("update_validation_error", thought_id=thought_id, error=str(e))
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except NotFound as e:
        logger.info("thought_not_found", method="PUT", thought_id=thought_id)
        return error_response(status.HTTP_404_NOT_FOUND, str(e))
    except Exception as e:
        logger.exception("update_error", thought_id=thought_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )

    logger.info("thought_updated", thought_id=thought_id)
    return ThoughtEnvelope(data=ThoughtResponse.from_thought(thought))


@router.delete("/{thought_id}", response_model=ThoughtEnvelope, responses=ERROR_RESPONSES)
async def delete_thought(
    thought_id: str = Path(..., description="Thought id"),
    scope_owner_id: str | None = Depends(get_scope_owner_id),  # noqa: B008
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> ThoughtEnvelope | JSONResponse:
    """Delete a thought and return it as it was."""
    try:
        thought = await repository.delete(thought_id, owner_id=scope_owner_id)
    except InvalidIdentifier as e:
        logger.info("invalid_thought_id", method="DELETE", thought_id=thought_id)
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except NotFound as e:
        logger.info("thought_not_found", method="DELETE", thought_id=thought_id)
        return error_response(status.HTTP_404_NOT_FOUND, str(e))
    except Exception as e:
        logger.exception("delete_error", thought_id=thought_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )

    logger.info("thought_deleted", thought_id=thought_id)
    return ThoughtEnvelope(data=ThoughtResponse.from_thought(thought))
