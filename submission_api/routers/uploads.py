# submission_api/routers/uploads.py — Multipart photo submission intake

import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from submission_api.config import Settings, get_settings
from submission_api.database import get_store_client
from submission_api.models.submission import SubmissionCreated
from submission_api.routers._responses import ErrorEnvelope, error_response
from submission_api.services.submission_intake import (
    build_submission_record,
    insert_submission,
    read_photo,
)
from submission_api.utils.exceptions import UploadFailedError
from submission_api.utils.multipart import read_capped_form

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_UPLOAD_ERROR = "Internal server error during upload."


async def read_submission_form(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[FormData]:
    """Receive the form body under the photo ceiling; released after the response."""
    try:
        form = await read_capped_form(request, max_photo_bytes=settings.max_photo_bytes)
    except HTTPException:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error receiving upload", extra={"error": str(exc)})
        raise UploadFailedError(INTERNAL_UPLOAD_ERROR) from exc
    try:
        yield form
    finally:
        await form.close()


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmissionCreated,
    responses={
        400: {"model": ErrorEnvelope},
        413: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)
async def upload_submission(
    form: FormData = Depends(read_submission_form),
    client: Any = Depends(get_store_client),
    settings: Settings = Depends(get_settings),
):
    """
    Validate one submission and store it with its optional photo.

    Form fields: firstName, lastName, dob, age and an optional file `photo`.
    A photo is mandatory from age 15; the photo is stored base64-encoded.
    """
    photo = form.get("photo")
    try:
        # Size ceiling is checked first, before any text validation.
        photo_upload = await read_photo(
            photo if isinstance(photo, UploadFile) else None,
            max_bytes=settings.max_photo_bytes,
        )

        record = build_submission_record(
            first_name=form.get("firstName"),
            last_name=form.get("lastName"),
            dob=form.get("dob"),
            age=form.get("age"),
            photo=photo_upload,
        )

        inserted_id = await run_in_threadpool(
            insert_submission,
            client,
            settings.submissions_table,
            record,
        )
    except HTTPException:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception(
            "Error processing upload",
            extra={"table": settings.submissions_table, "error": str(exc)},
        )
        return error_response(INTERNAL_UPLOAD_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return SubmissionCreated(insertedId=inserted_id)
