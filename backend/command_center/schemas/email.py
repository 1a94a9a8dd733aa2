"""Email notification schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmailRecipient(BaseModel):
    """Student entry in a profile approval batch. Extra keys are ignored."""
    name: str = ""
    email: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", "email", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


class RejectionRecipient(EmailRecipient):
    """Student entry in a profile rejection batch."""
    reasons: list[str] = Field(default_factory=list)

    @field_validator("reasons", mode="before")
    @classmethod
    def none_as_no_reasons(cls, value):
        return [] if value is None else value


class BulkEmailResult(BaseModel):
    """Delivery tally for one bulk send."""
    success_count: int = Field(0, serialization_alias="successCount")
    failed_count: int = Field(0, serialization_alias="failedCount")
    errors: list[str] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return self.success_count + self.failed_count
