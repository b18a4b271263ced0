# submission_api/utils/exceptions.py — Custom exception classes

from fastapi import HTTPException, status


class MissingTextDataError(HTTPException):
    def __init__(self, message: str = "Missing or invalid text data."):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class PhotoRequiredError(HTTPException):
    def __init__(self, message: str = "Photo is required for this age."):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class PhotoTooLargeError(HTTPException):
    def __init__(self, limit_bytes: int):
        super().__init__(
            status_code=413,
            detail="File too large.",
        )
        self.limit_bytes = limit_bytes


class SubmissionStoreError(Exception):
    """Raised when the data store does not confirm an insert."""


class UploadFailedError(HTTPException):
    def __init__(self, message: str = "Internal server error during upload."):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )
