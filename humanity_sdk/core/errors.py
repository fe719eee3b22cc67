"""Exception types raised by the Humanity SDK.

Local problems (bad arguments, missing configuration) are raised before any
request is sent and never carry an HTTP status. Non-success API responses are
normalized into :class:`HumanityError`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class HumanitySDKError(Exception):
    """Base class for all SDK errors."""


class HumanityValidationError(HumanitySDKError, ValueError):
    """Caller input was rejected before any network call."""


class HumanityConfigurationError(HumanitySDKError):
    """The client cannot operate with the supplied configuration or transport."""


class PresetVerificationError(HumanitySDKError):
    """A single-preset verification returned no result."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class HumanityError(HumanitySDKError):
    """Normalized error for a non-success Humanity API response.

    Attributes:
        code: Machine-readable code (``error_code``, else ``error``, else
            ``HTTP_<status>``).
        message: Human readable description.
        subcode: Optional ``error_subcode`` from the payload.
        context: Optional structured ``context`` map from the payload.
        status_code: HTTP status of the failed response.
        method: HTTP method of the failed request.
        url: URL of the failed request.
        body: Raw response body text.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int,
        subcode: str | None = None,
        context: dict[str, Any] | None = None,
        method: str | None = None,
        url: str | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.subcode = subcode
        self.context = context
        self.method = method
        self.url = url
        self.body = body

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_payload(
        cls,
        status_code: int,
        body: str | None,
        method: str | None = None,
        url: str | None = None,
    ) -> HumanityError:
        """Build an error from a raw status code and response body."""
        payload = parse_error_payload(body)
        code = payload.get("error_code") or payload.get("error") or f"HTTP_{status_code}"
        message = (
            payload.get("error_description")
            or payload.get("error")
            or f"Humanity API request failed with status {status_code}"
        )
        context = payload.get("context")
        return cls(
            message=str(message),
            code=str(code),
            status_code=status_code,
            subcode=payload.get("error_subcode"),
            context=context if isinstance(context, dict) else None,
            method=method,
            url=url,
            body=body,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> HumanityError:
        """Build an error from a failed ``httpx.Response``."""
        request = response.request
        return cls.from_payload(
            response.status_code,
            response.text,
            method=request.method,
            url=str(request.url),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "subcode": self.subcode,
            "context": self.context,
            "status_code": self.status_code,
            "message": self.message,
        }


def parse_error_payload(body: str | None) -> dict[str, Any]:
    """Parse an error response body into a payload dict.

    Accepts a JSON object, a JSON string that itself encodes an object, or
    anything else (which yields an empty dict).
    """
    if not body:
        return {}
    try:
        parsed: Any = json.loads(body)
        if isinstance(parsed, str):
            parsed = json.loads(parsed)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}
