"""
Invocation transport models.

RawInvocationResult mirrors what lambda.invoke hands back to the caller:
the JSON-encoded Payload and, on failure, a FunctionError marker
("Unhandled", "Handled", ...).
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNHANDLED_FUNCTION_ERROR = "Unhandled"


class RawInvocationResult(BaseModel):
    """Raw result returned by the invocation transport."""

    payload: str = Field(default="", alias="Payload")
    function_error: Optional[str] = Field(default=None, alias="FunctionError")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("payload", mode="before")
    @classmethod
    def _read_payload(cls, value: Any) -> Any:
        # boto3 returns a StreamingBody, other SDKs return raw bytes.
        if hasattr(value, "read"):
            value = value.read()
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("utf-8")
        return value

    @classmethod
    def from_invoke_response(cls, response: Mapping[str, Any]) -> "RawInvocationResult":
        """Wrap the dict returned by boto3 lambda.invoke()."""
        return cls.model_validate(response)

    @property
    def has_function_error(self) -> bool:
        return bool(self.function_error)

    @property
    def is_unhandled(self) -> bool:
        return self.function_error == UNHANDLED_FUNCTION_ERROR
