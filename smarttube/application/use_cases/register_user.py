from __future__ import annotations

from uuid import uuid4

from smarttube.application.dto.auth import RegisterUserInput, RegisterUserOutput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.password_hasher_port import PasswordHasherPort
from smarttube.domain.exceptions import EmailAlreadyExistsError

from .auth_common import build_auth_user_output, normalize_email, utcnow, validate_password


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        password_hasher: PasswordHasherPort,
        admin_emails: frozenset[str] = frozenset(),
    ):
        self._auth_port = auth_port
        self._password_hasher = password_hasher
        self._admin_emails = admin_emails

    def execute(self, command: RegisterUserInput) -> RegisterUserOutput:
        full_name = command.full_name.strip()
        email = normalize_email(command.email)
        password = command.password

        if not full_name:
            raise ValueError("full_name is required.")
        if not email or "@" not in email:
            raise ValueError("a valid email is required.")
        validate_password(password)

        password_hash = self._password_hasher.hash(password)
        role = "admin" if email in self._admin_emails else "user"

        def _tx(auth_port: AuthPort) -> RegisterUserOutput:
            if auth_port.get_user_by_email(email=email) is not None:
                raise EmailAlreadyExistsError("Email already in use.")

            now = utcnow()
            user = auth_port.create_user(
                user_id=str(uuid4()),
                full_name=full_name,
                email=email,
                role=role,
                email_verified=False,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            auth_port.create_identity(
                identity_id=str(uuid4()),
                user_id=user.id,
                provider="local",
                password_hash=password_hash,
                created_at=now,
            )
            return RegisterUserOutput(user=build_auth_user_output(user))

        return self._auth_port.execute_in_transaction(_tx)
