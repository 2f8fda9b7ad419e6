from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cohort_tools.domain.users.entities import User


class UserPublicDTO(BaseModel):
    """User projection sent to clients; never carries the password hash."""

    id: str = Field(serialization_alias="_id")
    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_user(cls, user: User) -> "UserPublicDTO":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class SignupResponseDTO(BaseModel):
    message: str = "User created successfully"
    new_user: UserPublicDTO = Field(serialization_alias="newUser")


class LoginResponseDTO(BaseModel):
    message: str = "Login successful"
    auth_token: str = Field(serialization_alias="authToken")
    user_id: str = Field(serialization_alias="userId")


class VerifyResponseDTO(BaseModel):
    message: str = "Token is valid"
    current_logged_user: UserPublicDTO = Field(serialization_alias="currentLoggedUser")


class UserProfileResponseDTO(BaseModel):
    message: str = "User found"
    user: UserPublicDTO


def dump(dto: BaseModel) -> dict[str, Any]:
    return dto.model_dump(mode="json", by_alias=True)
