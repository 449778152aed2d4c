from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints, field_validator

from .criteria import coerce_bound, parse_list

# bcrypt rejects longer passwords
MAX_PASSWORD_BYTES = 72


class UserProfile(BaseModel):
    sex: str = ""
    age: int | None = None
    nationality: str = ""
    job: str = ""


class GiftCriteria(BaseModel):
    """Optional eligibility constraints; an empty dimension matches everyone."""

    genders: list[str] = Field(default_factory=list)
    age_min: int | None = None
    age_max: int | None = None
    nationalities: list[str] = Field(default_factory=list)
    jobs: list[str] = Field(default_factory=list)

    @field_validator("genders", "nationalities", "jobs", mode="before")
    @classmethod
    def _normalise_list(cls, value: Any) -> list[str]:
        return parse_list(value)

    @field_validator("age_min", "age_max", mode="before")
    @classmethod
    def _normalise_bound(cls, value: Any) -> int | None:
        return coerce_bound(value)

    def is_unconstrained(self) -> bool:
        return (
            not self.genders
            and self.age_min is None
            and self.age_max is None
            and not self.nationalities
            and not self.jobs
        )


class Gift(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float = Field(default=0.0, ge=0.0)
    image: str | None = None
    criteria: GiftCriteria = Field(default_factory=GiftCriteria)


class GiftCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0.0)
    image: str | None = None
    criteria: GiftCriteria = Field(default_factory=GiftCriteria)


class GiftListResponse(BaseModel):
    gifts: list[Gift]
    total: int


class SuggestResponse(BaseModel):
    gifts: list[Gift]
    total_candidates: int
    profile: UserProfile


class LoginRequest(BaseModel):
    username: str
    password: str


class SignupRequest(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=64)]
    password: str = Field(..., min_length=3)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value
