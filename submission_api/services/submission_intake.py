from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from starlette.datastructures import UploadFile

from submission_api.models.submission import SubmissionRecord
from submission_api.utils.exceptions import (
    MissingTextDataError,
    PhotoRequiredError,
    PhotoTooLargeError,
    SubmissionStoreError,
)

logger = logging.getLogger(__name__)

PHOTO_REQUIRED_MIN_AGE = 15
DEFAULT_PHOTO_MIME_TYPE = "application/octet-stream"

_AGE_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PhotoUpload:
    content: bytes
    mime_type: str

    def as_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value if value.strip() else None


def parse_age(value: Any) -> int:
    """Parse a base-10 integer age; anything else is invalid text data."""
    if not isinstance(value, str):
        raise MissingTextDataError()
    candidate = value.strip()
    if not _AGE_PATTERN.fullmatch(candidate):
        raise MissingTextDataError()
    return int(candidate, 10)


def photo_required(age: int) -> bool:
    return age >= PHOTO_REQUIRED_MIN_AGE


async def read_photo(upload: UploadFile | None, *, max_bytes: int) -> PhotoUpload | None:
    """
    Buffer the attachment in memory, enforcing the size ceiling.

    A part without a filename is what browsers send for an empty file input
    and counts as no attachment. Reads at most max_bytes + 1 bytes.
    """
    if upload is None or not upload.filename:
        return None
    try:
        if upload.size is not None and upload.size > max_bytes:
            raise PhotoTooLargeError(max_bytes)
        content = await upload.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise PhotoTooLargeError(max_bytes)
    finally:
        await upload.close()
    return PhotoUpload(
        content=content,
        mime_type=upload.content_type or DEFAULT_PHOTO_MIME_TYPE,
    )


def build_submission_record(
    *,
    first_name: Any,
    last_name: Any,
    dob: Any,
    age: Any,
    photo: PhotoUpload | None,
    submitted_at: datetime | None = None,
) -> SubmissionRecord:
    """
    Validate the text fields and assemble the record to insert.

    Checks run in order and the first failure wins: text fields, age,
    then the mandatory photo for ages at or above the threshold.
    """
    cleaned = [_clean_text(first_name), _clean_text(last_name), _clean_text(dob)]
    if any(value is None for value in cleaned):
        raise MissingTextDataError()
    parsed_age = parse_age(age)

    if photo is None and photo_required(parsed_age):
        raise PhotoRequiredError()

    return SubmissionRecord(
        firstName=cleaned[0],
        lastName=cleaned[1],
        dob=cleaned[2],
        age=parsed_age,
        submittedAt=submitted_at or _utc_now(),
        photoBase64=photo.as_base64() if photo else None,
        photoMimeType=photo.mime_type if photo else None,
    )


def insert_submission(client: Any, table: str, record: SubmissionRecord) -> str:
    """Insert one submission and return the identifier allocated by the store."""
    result = client.table(table).insert(record.to_row()).execute()
    if not result.data or result.data[0].get("id") is None:
        raise SubmissionStoreError(f"Insert into {table} returned no id")
    inserted_id = str(result.data[0]["id"])
    logger.info("New entry created with ID: %s", inserted_id, extra={"submission_id": inserted_id})
    return inserted_id
