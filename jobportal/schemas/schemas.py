"""
Pydantic Schemas - Request Validation

All API request schemas in one file for simplicity. Responses use the
{success, message?, payload} envelope built directly in the routes.
"""

import json
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator, model_validator


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    job_seeker = "Job Seeker"
    employer = "Employer"


class ApplicationStatus(str, Enum):
    pending = "Pending"
    accepted = "Accepted"
    rejected = "Rejected"


def first_error_message(exc: ValidationError) -> str:
    """Short human message for the first failing field."""
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid input")
    return f"{field}: {message}" if field else message


# ============================================================
# USER SCHEMAS
# ============================================================

PHONE_PATTERN = r"^\d{10}$"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    password: str = Field(..., min_length=8, max_length=32)
    role: UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=8, max_length=32)
    confirmPassword: str


class PreferencesRequest(BaseModel):
    categories: List[str]

    @field_validator("categories", mode="before")
    @classmethod
    def parse_categories(cls, value):
        # Accepts a list, a JSON-encoded list, or "a, b, c"
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                return [part.strip() for part in value.split(",") if part.strip()]
        return value


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=30)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[str] = None
    # Job seekers
    skills: Optional[List[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    # Employers
    companyName: Optional[str] = None
    industry: Optional[str] = None
    companySize: Optional[str] = None


SEEKER_PROFILE_FIELDS = ("skills", "experience", "education")
EMPLOYER_PROFILE_FIELDS = ("companyName", "industry", "companySize")


# ============================================================
# JOB SCHEMAS
# ============================================================

def check_salary_fields(fixed_salary, salary_from, salary_to) -> None:
    """A job pays either a fixed salary or a full from/to range, never both."""
    ranged = salary_from is not None and salary_to is not None
    if fixed_salary is None and not ranged:
        raise ValueError("Please either provide fixed salary or ranged salary.")
    if fixed_salary is not None and (salary_from is not None or salary_to is not None):
        raise ValueError("Cannot Enter Fixed and Ranged Salary together.")
    if ranged and salary_from > salary_to:
        raise ValueError("salaryFrom cannot exceed salaryTo.")


class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=2000)
    category: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    fixedSalary: Optional[int] = Field(None, ge=0)
    salaryFrom: Optional[int] = Field(None, ge=0)
    salaryTo: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_salary(self):
        check_salary_fields(self.fixedSalary, self.salaryFrom, self.salaryTo)
        return self


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=2000)
    category: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    location: Optional[str] = None
    fixedSalary: Optional[int] = Field(None, ge=0)
    salaryFrom: Optional[int] = Field(None, ge=0)
    salaryTo: Optional[int] = Field(None, ge=0)
    expired: Optional[bool] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationForm(BaseModel):
    """Free-text fields of a submission (validated just before creation)."""
    name: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    coverLetter: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    reply: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
