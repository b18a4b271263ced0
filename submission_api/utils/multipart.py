# submission_api/utils/multipart.py — Size-capped, in-memory form parsing

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Request
from starlette.datastructures import FormData
from starlette.formparsers import FormParser, MultiPartException, MultiPartParser

from submission_api.utils.exceptions import MissingTextDataError, PhotoTooLargeError

# Room for boundaries, part headers and the text fields on top of the photo.
FORM_OVERHEAD_BYTES = 64 * 1024


class InMemoryMultiPartParser(MultiPartParser):
    """MultiPartParser whose file parts never roll over to a temp file below the body cap."""

    def __init__(self, headers, stream, *, spool_max_size: int):
        super().__init__(headers, stream)
        self.spool_max_size = spool_max_size


async def _capped_stream(request: Request, max_photo_bytes: int, limit: int) -> AsyncGenerator[bytes, None]:
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PhotoTooLargeError(max_photo_bytes)
        yield chunk


async def read_capped_form(request: Request, *, max_photo_bytes: int) -> FormData:
    """
    Parse the request body as a form, rejecting with 413 once it outgrows
    the photo ceiling plus form overhead. File parts stay in memory.
    """
    limit = max_photo_bytes + FORM_OVERHEAD_BYTES
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise PhotoTooLargeError(max_photo_bytes)

    stream = _capped_stream(request, max_photo_bytes, limit)
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type == "multipart/form-data":
        parser = InMemoryMultiPartParser(request.headers, stream, spool_max_size=limit)
        try:
            return await parser.parse()
        except MultiPartException as exc:
            raise MissingTextDataError() from exc
    if media_type == "application/x-www-form-urlencoded":
        return await FormParser(request.headers, stream).parse()
    return FormData()
