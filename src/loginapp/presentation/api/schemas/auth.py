"""Authentication schemas for request/response models.

Request fields are optional so that missing values reach the credential
service, which answers with its own messages. camelCase aliases match
the browser client.
"""

from pydantic import BaseModel, ConfigDict, Field

from loginapp_identity.schemas import PublicUser, ServiceResponse


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "name": "Jane Doe",
                "phone": "+1 555 0100",
                "password": "Secret123",
                "confirmPassword": "Secret123",
            },
        },
    )

    email: str | None = None
    name: str | None = None
    phone: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class LoginRequest(BaseModel):
    """Request schema for user login."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Secret123",
                "rememberMe": True,
            },
        },
    )

    email: str | None = None
    password: str | None = None
    remember_me: bool = Field(default=False, alias="rememberMe")


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset email."""

    email: str | None = None


class ResetPasswordRequest(BaseModel):
    """Request schema for completing a password reset."""

    model_config = ConfigDict(populate_by_name=True)

    token: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class UserResponse(BaseModel):
    """Public user data."""

    id: int
    email: str
    name: str
    phone: str | None = None

    @classmethod
    def from_public_user(cls, user: PublicUser) -> "UserResponse":
        return cls(id=user.id, email=user.email, name=user.name, phone=user.phone)


class SessionData(BaseModel):
    """Session token and the user it was issued to."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    user: UserResponse
    expires_in: int | None = Field(default=None, alias="expiresIn")


class MessageResponse(BaseModel):
    """Outcome of a credential operation, optionally carrying a session."""

    success: bool
    message: str
    data: SessionData | None = None

    @classmethod
    def from_service(cls, response: ServiceResponse) -> "MessageResponse":
        data = None
        if response.data is not None:
            data = SessionData(
                token=response.data.token,
                user=UserResponse.from_public_user(response.data.user),
                expires_in=response.data.expires_in,
            )
        return cls(success=response.success, message=response.message, data=data)


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse


class HealthResponse(BaseModel):
    status: str
    version: str
