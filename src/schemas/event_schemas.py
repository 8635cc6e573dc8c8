"""Event collection request and response schemas.

Payload keys are camelCase on the wire (``trackingUserId``); snake_case
names are accepted as well.
"""

from datetime import UTC, datetime
from ipaddress import ip_address
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.application.dtos.event_dtos import RecordedEvent

_STRING_METADATA_KEYS = ("browser", "os", "screenSize")
MAX_URL_LENGTH = 2048

_http_url = TypeAdapter(HttpUrl)


def validate_http_url(value: str) -> str:
    """Check an http(s) URL, returning it unchanged."""
    if len(value) > MAX_URL_LENGTH:
        raise ValueError(f"URL must be at most {MAX_URL_LENGTH} characters")
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http or https URL") from None
    return value


class EventCreateRequest(BaseModel):
    """Request to record one event.

    Attributes:
        event: Event name (e.g., "click").
        url: Page URL (http or https).
        timestamp: When the event happened; naive values are read as UTC.
        referrer: Referring URL.
        device: Device class reported by the client ("mobile", "desktop", ...).
        ip_address: End-user address; defaults to the request source.
        tracking_user_id: Client-chosen end-user identifier.
        session_id: Client session identifier.
        page_title: Document title.
        page_load_time: Load time in milliseconds.
        metadata: Free-form attributes (browser, os, screenSize, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    event: str = Field(..., min_length=1, max_length=255, examples=["click"])
    url: str = Field(..., examples=["https://example.com/pricing"])
    timestamp: datetime = Field(..., description="ISO 8601 timestamp")
    referrer: str | None = Field(None)
    device: str | None = Field(None, max_length=50, examples=["mobile"])
    ip_address: str | None = Field(None, description="IPv4 or IPv6 address")
    tracking_user_id: str | None = Field(None, max_length=255)
    session_id: str | None = Field(None, max_length=255)
    page_title: str | None = Field(None, max_length=512)
    page_load_time: int | None = Field(None, ge=0, description="Milliseconds")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("url", "referrer")
    @classmethod
    def validate_urls(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_http_url(value)

    @field_validator("ip_address")
    @classmethod
    def validate_ip_address(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return str(ip_address(value))
        except ValueError:
            raise ValueError("ipAddress must be a valid IPv4 or IPv6 address") from None

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, value: dict[str, Any]) -> dict[str, Any]:
        for key in _STRING_METADATA_KEYS:
            if key in value and value[key] is not None and not isinstance(value[key], str):
                raise ValueError(f"metadata.{key} must be a string")
        return value


class EventCreateResponse(BaseModel):
    """Acknowledgement of a recorded event."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Event identifier")
    event: str = Field(..., description="Event name")
    timestamp: datetime = Field(..., description="Event timestamp")
    message: str = Field(default="Event recorded successfully")

    @classmethod
    def from_dto(cls, dto: RecordedEvent) -> "EventCreateResponse":
        return cls(id=dto.event_id, event=dto.event_type, timestamp=dto.timestamp)
