"""
Canonical response model.

Every invocation result, whatever the transport returned, is reduced to a
Response: a status code, an encoding tag and a JSON-representable body.
The encoding tag tells the consumer how the body has to be reversed:

- identity: the body is the payload itself
- gzip: the body is base64 text of the gzipped JSON envelope
- s3: the body is a pre-signed URL to the stored JSON envelope
"""

import json
import re
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_STATUS_CODE = 200

# UTF-16 surrogates that survived decoding unpaired, e.g. json.loads('"\\ud800"').
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


class Encoding(str, Enum):
    """Transport tier of a Response body."""

    IDENTITY = "identity"
    GZIP = "gzip"
    S3 = "s3"


class Response(BaseModel):
    """
    Canonical invocation response.

    statusCode and encoding fall back to their defaults when missing or falsy.
    body falls back to an empty object only when the key is absent, so
    falsy bodies such as False, 0 or "" survive construction.
    """

    statusCode: int = DEFAULT_STATUS_CODE
    encoding: Encoding = Encoding.IDENTITY
    body: Any = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        # Presence of body is decided by the key alone; the other two
        # fields reset to their defaults on any falsy value.
        for key in ("statusCode", "encoding"):
            if key in data and not data[key]:
                del data[key]
        return data

    @classmethod
    def from_options(
        cls, options: Optional[Union["Response", Mapping[str, Any]]] = None
    ) -> "Response":
        """Build a Response from a response-like value (mapping, Response or None)."""
        if options is None:
            return cls()
        if isinstance(options, Response):
            return options
        if not isinstance(options, Mapping):
            raise TypeError(f"Cannot build Response from {type(options).__name__}")
        return cls.model_validate(options)

    def to_dict(self) -> dict:
        """Wire form: statusCode, encoding, body in that order."""
        return {
            "statusCode": self.statusCode,
            "encoding": self.encoding.value,
            "body": self.body,
        }

    def to_json(self) -> str:
        """
        Compact JSON text of the wire form.

        Non-ASCII text is kept as-is; unpaired surrogates are written as
        \\uXXXX escapes so the result can always be encoded as UTF-8.
        """
        text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text)

    def byte_size(self) -> int:
        """Size of the transmitted representation in bytes (UTF-8)."""
        return len(self.to_json().encode("utf-8"))

    def __str__(self) -> str:
        return self.to_json()
