"""User accounts: registration and credential checks."""

from __future__ import annotations

import logging

from app.auth.passwords import hash_password, verify_password
from app.core.enums import UserRole
from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models import User
from app.services.base_service import BaseService
from app.utils.validators import require_text, validate_email

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserService(BaseService):
    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(f"User {user_id} not found.")
        return user

    def register(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole | str | None = None,
    ) -> User:
        """Create a user. The first account becomes admin; later ones default to accountant."""
        cleaned_email = validate_email(email)
        if cleaned_email is None:
            raise ValidationError("Email is required.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        if self.get_by_email(cleaned_email) is not None:
            raise ConflictError(f"A user with email {cleaned_email} already exists.")

        if self.db.query(User.id).count() == 0:
            resolved_role = UserRole.ADMIN
        else:
            try:
                resolved_role = UserRole(role) if role else UserRole.ACCOUNTANT
            except ValueError as exc:
                raise ValidationError(f"Unknown role: {role}") from exc

        user = User(
            email=cleaned_email,
            full_name=require_text(full_name, "Full name"),
            hashed_password=hash_password(password),
            role=resolved_role,
            is_active=True,
        )
        user = self.save(user)
        logger.info("user.registered", extra={"event": "user.registered", "user_id": user.id})
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email or "")
        if user is None or not user.is_active or not verify_password(password or "", user.hashed_password):
            raise AuthenticationError("Invalid credentials.")
        return user
