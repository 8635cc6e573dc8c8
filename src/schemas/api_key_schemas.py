"""App and API key request and response schemas.

Pydantic schemas for app registration and key management endpoints.
The plaintext key only ever appears in ``ApiKeyCreateResponse``.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.application.dtos.api_key_dtos import (
    ApiKeyListItem,
    ApiKeyListResult,
    IssuedApiKey,
    RegisteredApp,
)
from src.schemas.event_schemas import validate_http_url


# =============================================================================
# Request Schemas
# =============================================================================


class AppCreateRequest(BaseModel):
    """Register an app.

    Attributes:
        name: App display name.
        description: Optional free text.
        url: Optional app URL.
        ip_restrictions: IPs or CIDR ranges allowed to use the first key.
    """

    name: str = Field(..., min_length=1, max_length=255, examples=["Marketing site"])
    description: str | None = Field(None, max_length=2000)
    url: str | None = Field(None, examples=["https://example.com"])
    ip_restrictions: list[str] = Field(
        default_factory=list, examples=[["203.0.113.0/24", "2001:db8::1"]]
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        return validate_http_url(value) if value else None


class ApiKeyCreateRequest(BaseModel):
    """Issue a key for an app without an active key."""

    app_id: UUID = Field(..., description="App to issue the key for")
    ip_restrictions: list[str] = Field(default_factory=list)


# =============================================================================
# Response Schemas
# =============================================================================


class ApiKeyCreateResponse(BaseModel):
    """Newly issued key. ``api_key`` is shown once and never again."""

    id: UUID = Field(..., description="Key identifier")
    app_id: UUID
    api_key: str = Field(..., description="Plaintext key, store it now")
    key_prefix: str = Field(..., examples=["bk_AbC12xY"])
    expires_at: datetime
    ip_restrictions: list[str]

    @classmethod
    def from_dto(cls, dto: IssuedApiKey) -> "ApiKeyCreateResponse":
        return cls(
            id=dto.key_id,
            app_id=dto.app_id,
            api_key=dto.api_key,
            key_prefix=dto.key_prefix,
            expires_at=dto.expires_at,
            ip_restrictions=list(dto.ip_restrictions),
        )


class AppCreateResponse(BaseModel):
    """Registered app with its first key."""

    id: UUID
    name: str
    description: str | None = None
    url: str | None = None
    api_key: ApiKeyCreateResponse

    @classmethod
    def from_dto(cls, dto: RegisteredApp) -> "AppCreateResponse":
        return cls(
            id=dto.app_id,
            name=dto.name,
            description=dto.description,
            url=dto.url,
            api_key=ApiKeyCreateResponse.from_dto(dto.api_key),
        )


class ApiKeyResponse(BaseModel):
    """Key as listed to its owner.

    Attributes:
        id: Key identifier.
        app_id: Owning app.
        app_name: Owning app's name.
        key_prefix: Display prefix of the secret.
        is_active: False once revoked.
        is_expired: True once past expiry.
        expires_at: Expiry timestamp.
        ip_restrictions: Allowed sources; empty means any.
        last_used_at: Last successful authentication.
        created_at: Creation timestamp.
    """

    id: UUID
    app_id: UUID
    app_name: str | None = None
    key_prefix: str
    is_active: bool
    is_expired: bool
    expires_at: datetime
    ip_restrictions: list[str]
    last_used_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_dto(cls, dto: ApiKeyListItem) -> "ApiKeyResponse":
        return cls(
            id=dto.key_id,
            app_id=dto.app_id,
            app_name=dto.app_name,
            key_prefix=dto.key_prefix,
            is_active=dto.is_active,
            is_expired=dto.is_expired,
            expires_at=dto.expires_at,
            ip_restrictions=list(dto.ip_restrictions),
            last_used_at=dto.last_used_at,
            created_at=dto.created_at,
        )


class ApiKeyListResponse(BaseModel):
    api_keys: list[ApiKeyResponse]
    total_count: int
    active_count: int

    @classmethod
    def from_dto(cls, dto: ApiKeyListResult) -> "ApiKeyListResponse":
        return cls(
            api_keys=[ApiKeyResponse.from_dto(item) for item in dto.keys],
            total_count=dto.total_count,
            active_count=dto.active_count,
        )


class ApiKeyRevokeResponse(BaseModel):
    id: UUID
    message: str = "API key revoked"
