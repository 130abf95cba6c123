from __future__ import annotations

from datetime import UTC, datetime

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from authservice.domain.users.entities import TOKEN_TYPE, IssuedTokens, User

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


def normalize_email(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class RegisterRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    password_confirmation: str
    name: str = Field(min_length=1, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: object) -> object:
        return normalize_email(value)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        stripped = value.strip()
        if not stripped:
            raise PydanticCustomError("missing", "Field required")
        return stripped

    @model_validator(mode="after")
    def _check_confirmation(self) -> RegisterRequestDTO:
        if self.password != self.password_confirmation:
            raise PydanticCustomError(
                "confirmed",
                "The password field confirmation does not match.",
                {"field": "password"},
            )
        return self


class LoginRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: object) -> object:
        return normalize_email(value)


class RefreshRequestDTO(BaseModel):
    refresh_token: str = Field(min_length=1)


class UserPublicDTO(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_entity(cls, user: User) -> UserPublicDTO:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegisteredDTO(BaseModel):
    message: str = "User successfully registered"
    user: UserPublicDTO


class CurrentUserDTO(BaseModel):
    user: UserPublicDTO


class TokenPairDTO(BaseModel):
    access_token: str
    refresh_token: str
    expires_date: datetime
    token_type: str = TOKEN_TYPE

    @field_serializer("expires_date")
    def _serialize_expiry(self, value: datetime) -> str:
        return format_timestamp(value)


class AuthSuccessDTO(BaseModel):
    data: TokenPairDTO

    @classmethod
    def from_tokens(cls, tokens: IssuedTokens) -> AuthSuccessDTO:
        return cls(
            data=TokenPairDTO(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_date=tokens.expires_date,
                token_type=tokens.token_type,
            )
        )
