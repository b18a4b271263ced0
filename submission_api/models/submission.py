# submission_api/models/submission.py — Submission schemas

from datetime import datetime

from pydantic import BaseModel, model_validator


class SubmissionRecord(BaseModel):
    """One persisted submission. Field names are the stored column names."""

    firstName: str
    lastName: str
    dob: str
    age: int
    submittedAt: datetime
    photoBase64: str | None = None
    photoMimeType: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _photo_fields_paired(self) -> "SubmissionRecord":
        if (self.photoBase64 is None) != (self.photoMimeType is None):
            raise ValueError("photoBase64 and photoMimeType must be set together")
        return self

    def to_row(self) -> dict:
        row = self.model_dump()
        row["submittedAt"] = self.submittedAt.isoformat()
        return row


class SubmissionCreated(BaseModel):
    message: str = "Upload successful!"
    insertedId: str


class ServiceStatus(BaseModel):
    message: str
    upload_endpoint: str
