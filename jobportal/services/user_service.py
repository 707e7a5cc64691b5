"""
User Service - accounts, email verification, password reset, profiles.

Token rules:
- verification token: random, emailed as a link, valid verify_token_minutes,
  cleared on use
- reset token: random, only its sha256 is stored, valid reset_token_minutes,
  cleared on use (single-use)
"""

import logging
from datetime import timedelta
from typing import Callable, List, Optional

from jobportal.core.config import Settings, get_settings
from jobportal.core.errors import BadRequest, Forbidden, InternalError, NotFound
from jobportal.core.security import generate_token, hash_password, hash_token, verify_password
from jobportal.db.query import QuerySpec
from jobportal.schemas.schemas import (
    EMPLOYER_PROFILE_FIELDS,
    SEEKER_PROFILE_FIELDS,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
    UserRole,
)
from jobportal.services.mail import MailError, MailService
from jobportal.services.mongo_service import UserStore
from jobportal.utils.clock import utcnow

logger = logging.getLogger(__name__)


class UserService:

    def __init__(
        self,
        users: UserStore,
        mail: MailService,
        settings: Settings = None,
        clock: Callable = utcnow,
    ):
        self.users = users
        self.mail = mail
        self.settings = settings or get_settings()
        self.clock = clock

    # ============================================================
    # REGISTRATION & VERIFICATION
    # ============================================================

    def register(self, data: RegisterRequest) -> dict:
        if self.users.find_by_email(data.email):
            raise BadRequest("Email already registered!")

        verify_token = generate_token(32)
        now = self.clock()
        user = self.users.create({
            "name": data.name,
            "email": data.email,
            "phone": data.phone,
            "password": hash_password(data.password),
            "role": data.role.value,
            "address": "",
            "skills": [],
            "experience": "",
            "education": "",
            "companyName": "",
            "industry": "",
            "companySize": "",
            "preferredCategories": [],
            "verifyToken": verify_token,
            "verifyTokenExpiry": now + timedelta(minutes=self.settings.verify_token_minutes),
            "isVerified": False,
            "createdAt": now,
        })

        verify_url = f"{self.settings.frontend_url}/verify/{verify_token}"
        try:
            self.mail.send(
                data.email,
                "Verify your Job Portal account",
                f"Click here to verify your account: {verify_url}",
            )
        except MailError:
            raise InternalError("Email could not be sent.")

        logger.info("Registered user %s as %s", user["_id"], data.role.value)
        return user

    def verify(self, token: str) -> dict:
        user = self.users.find_one(
            QuerySpec().where("verifyToken", token).after("verifyTokenExpiry", self.clock())
        )
        if not user:
            raise BadRequest("Invalid or expired token")

        user["isVerified"] = True
        user.pop("verifyToken", None)
        user.pop("verifyTokenExpiry", None)
        self.users.save(user)
        logger.info("Verified user %s", user["_id"])
        return user

    # ============================================================
    # LOGIN
    # ============================================================

    def authenticate(self, data: LoginRequest) -> dict:
        user = self.users.find_by_email(data.email)
        if not user:
            raise BadRequest("Invalid Email or Password.")
        if not user.get("isVerified"):
            raise Forbidden("Please verify your email to login.")
        if not verify_password(data.password, user["password"]):
            raise BadRequest("Invalid Email or Password.")
        if user["role"] != data.role.value:
            raise NotFound("User with provided email not found!")
        return user

    # ============================================================
    # PASSWORD RESET
    # ============================================================

    def forgot_password(self, email: str) -> None:
        user = self.users.find_by_email(email)
        if not user:
            raise NotFound("User not found with that email.")

        reset_token = generate_token(20)
        user["resetPasswordToken"] = hash_token(reset_token)
        user["resetPasswordExpiry"] = self.clock() + timedelta(minutes=self.settings.reset_token_minutes)
        self.users.save(user)

        reset_url = f"{self.settings.frontend_url}/password/reset/{reset_token}"
        message = (
            "You requested a password reset. Click here to set a new password:\n\n"
            f"{reset_url}\n\nIf you didn't request this, please ignore."
        )
        try:
            self.mail.send(email, "Password Reset Request", message)
        except MailError:
            # Token is useless if the email never arrived
            user.pop("resetPasswordToken", None)
            user.pop("resetPasswordExpiry", None)
            self.users.save(user)
            raise InternalError("Email could not be sent.")

    def reset_password(self, token: str, data: ResetPasswordRequest) -> dict:
        if data.password != data.confirmPassword:
            raise BadRequest("Passwords do not match.")

        user = self.users.find_one(
            QuerySpec()
            .where("resetPasswordToken", hash_token(token))
            .after("resetPasswordExpiry", self.clock())
        )
        if not user:
            raise BadRequest("Invalid or expired reset token.")

        user["password"] = hash_password(data.password)
        user.pop("resetPasswordToken", None)
        user.pop("resetPasswordExpiry", None)
        self.users.save(user)
        logger.info("Password reset for user %s", user["_id"])
        return user

    # ============================================================
    # PROFILE
    # ============================================================

    def update_profile(self, user: dict, data: ProfileUpdate) -> dict:
        """Only provided fields are updated; role decides which extras apply."""
        updates = data.model_dump(exclude_none=True)
        for field in ("name", "phone", "address"):
            if field in updates:
                user[field] = updates[field]

        role_fields = SEEKER_PROFILE_FIELDS if user["role"] == UserRole.job_seeker.value else EMPLOYER_PROFILE_FIELDS
        for field in role_fields:
            if field in updates:
                user[field] = updates[field]

        self.users.save(user)
        return user

    def update_preferences(self, user: dict, categories: List[str]) -> List[str]:
        user["preferredCategories"] = categories
        self.users.save(user)
        return categories

    def count_by_role(self, role: Optional[str]) -> int:
        if not role:
            raise BadRequest("Query parameter `role` is required")
        return self.users.count(QuerySpec().where("role", role))
