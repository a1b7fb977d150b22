import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.deps import get_waitlist_service
from core.exceptions import DuplicateEmailError, FieldError, StorageError, WaitlistValidationError
from core.rate_limit import limiter
from schemas.waitlist import WaitlistCountResponse, WaitlistEntryOut, WaitlistJoinResponse
from services.waitlist import WaitlistService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/waitlist", tags=["waitlist"])
settings = get_settings()

JOIN_FAILED_MESSAGE = "Failed to join waitlist"
COUNT_FAILED_MESSAGE = "Failed to get waitlist count"


def _validation_response(errors: list[FieldError]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": [error.as_dict() for error in errors]},
    )


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("/count", response_model=WaitlistCountResponse)
def get_waitlist_count(service: WaitlistService = Depends(get_waitlist_service)):
    try:
        count = service.get_waitlist_count()
    except StorageError:
        logger.exception("Error getting waitlist count")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, COUNT_FAILED_MESSAGE)
    except Exception:
        logger.exception("Unexpected error getting waitlist count")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, COUNT_FAILED_MESSAGE)
    return WaitlistCountResponse(count=count)


@router.post("", response_model=WaitlistJoinResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_waitlist)
async def join_waitlist(request: Request, service: WaitlistService = Depends(get_waitlist_service)):
    try:
        payload = await request.json()
    except ValueError:
        return _validation_response([FieldError(field="body", message="Request body must be valid JSON")])

    try:
        entry = await run_in_threadpool(service.join_waitlist, payload)
    except WaitlistValidationError as exc:
        return _validation_response(exc.errors)
    except DuplicateEmailError as exc:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)
    except StorageError:
        logger.exception("Error creating waitlist entry")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, JOIN_FAILED_MESSAGE)
    except Exception:
        logger.exception("Unexpected error creating waitlist entry")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, JOIN_FAILED_MESSAGE)

    return WaitlistJoinResponse(
        message="Successfully joined the waitlist!",
        entry=WaitlistEntryOut(id=entry.id, full_name=entry.full_name, email=entry.email, company=entry.company),
    )
