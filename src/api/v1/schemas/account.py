"""Pydantic schemas for sign-up and sign-in."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt reads at most this many bytes of a password.
MAX_PASSWORD_BYTES = 72


class SignUpRequest(BaseModel):
    """Schema for registering an account."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "a@x.com",
                "password": "pw123456",
                "name": "Kim",
                "age": 20,
                "gender": "M",
                "profile_image": None,
            }
        },
    )

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=0, le=150)
    gender: str = Field(..., min_length=1, max_length=20)
    profile_image: str | None = Field(None, max_length=500)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class SignInRequest(BaseModel):
    """Schema for signing in."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class SignInResponse(BaseModel):
    """Schema for a successful sign-in."""

    message: str
    access_token: str
    token_type: str = "bearer"
