from __future__ import annotations

from datetime import timedelta

import pytest

from smarttube.application.dto.auth import (
    ChangePasswordInput,
    LoginLocalInput,
    LogoutInput,
    RefreshSessionInput,
    RegisterUserInput,
    RequestPasswordResetInput,
    ResetPasswordInput,
)
from smarttube.application.use_cases.auth_common import utcnow
from smarttube.application.use_cases.login_local import LoginLocalUseCase
from smarttube.application.use_cases.logout_session import LogoutSessionUseCase
from smarttube.application.use_cases.manage_account import ChangePasswordUseCase, DeleteAccountUseCase
from smarttube.application.use_cases.refresh_session import RefreshSessionUseCase
from smarttube.application.use_cases.register_user import RegisterUserUseCase
from smarttube.application.use_cases.request_password_reset import RequestPasswordResetUseCase
from smarttube.application.use_cases.reset_password import ResetPasswordUseCase
from smarttube.domain.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    MailDeliveryError,
    PasswordResetTokenInvalidError,
    RefreshSessionInvalidError,
    UserBannedError,
)

from tests.fakes import FakeAuthPort, FakePasswordHasher, FakeTokenPort, make_user


class FakeMailer:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, *, to_email: str, subject: str, body: str, html_body: str | None = None) -> None:
        self.sent.append({"to_email": to_email, "subject": subject, "body": body})


def _login(auth_port: FakeAuthPort, *, email: str = "alice@example.com", password: str = "secret-123", admins=()):
    use_case = LoginLocalUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        token_port=FakeTokenPort(),
        admin_emails=frozenset(admins),
    )
    return use_case.execute(LoginLocalInput(email=email, password=password, user_agent="pytest", ip="127.0.0.1"))


def test_register_creates_user_and_local_identity():
    auth_port = FakeAuthPort()
    use_case = RegisterUserUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())

    output = use_case.execute(
        RegisterUserInput(full_name=" Alice ", email="Alice@Example.com ", password="secret-123")
    )

    assert output.user.email == "alice@example.com"
    assert output.user.role == "user"
    identity = auth_port.get_identity_for_user_provider(user_id=output.user.id, provider="local")
    assert identity is not None
    assert identity.password_hash == "hashed::secret-123"


def test_register_promotes_configured_admin_email():
    use_case = RegisterUserUseCase(
        auth_port=FakeAuthPort(),
        password_hasher=FakePasswordHasher(),
        admin_emails=frozenset({"boss@example.com"}),
    )

    output = use_case.execute(RegisterUserInput(full_name="Boss", email="boss@example.com", password="secret-123"))

    assert output.user.is_admin is True


def test_register_rejects_duplicate_email_and_short_password():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    use_case = RegisterUserUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())

    with pytest.raises(EmailAlreadyExistsError):
        use_case.execute(RegisterUserInput(full_name="Alice", email="alice@example.com", password="secret-123"))
    with pytest.raises(ValueError):
        use_case.execute(RegisterUserInput(full_name="Bob", email="bob@example.com", password="short"))


def test_login_issues_tokens_and_session():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")

    output = _login(auth_port)

    assert output.access_token == "access-user-1"
    assert output.refresh_token == "refresh-token"
    session = auth_port.get_session_by_refresh_token_hash(refresh_token_hash="hash::refresh-token")
    assert session is not None
    assert session.user_agent == "pytest"


def test_login_rejects_wrong_password():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")

    with pytest.raises(InvalidCredentialsError):
        _login(auth_port, password="wrong-pass")


def test_login_rejects_banned_user():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(is_banned=True), password_hash="hashed::secret-123")

    with pytest.raises(UserBannedError):
        _login(auth_port)


def test_login_promotes_admin_email_on_sign_in():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")

    output = _login(auth_port, admins={"alice@example.com"})

    assert output.user.is_admin is True
    assert auth_port.users["user-1"].role == "admin"


def test_refresh_rotates_session():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")
    _login(auth_port)
    use_case = RefreshSessionUseCase(auth_port=auth_port, token_port=FakeTokenPort())

    output = use_case.execute(RefreshSessionInput(refresh_token="refresh-token", user_agent=None, ip=None))

    assert output.user.id == "user-1"
    revoked = [session for session in auth_port.sessions.values() if session.revoked_at is not None]
    assert len(revoked) == 1
    assert len(auth_port.sessions) == 2


def test_refresh_rejects_revoked_session():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")
    _login(auth_port)
    LogoutSessionUseCase(auth_port=auth_port, token_port=FakeTokenPort()).execute(
        LogoutInput(refresh_token="refresh-token")
    )

    with pytest.raises(RefreshSessionInvalidError):
        RefreshSessionUseCase(auth_port=auth_port, token_port=FakeTokenPort()).execute(
            RefreshSessionInput(refresh_token="refresh-token", user_agent=None, ip=None)
        )


def test_refresh_rejects_user_banned_after_sign_in():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")
    _login(auth_port)
    auth_port.users["user-1"] = make_user(is_banned=True)

    with pytest.raises(UserBannedError):
        RefreshSessionUseCase(auth_port=auth_port, token_port=FakeTokenPort()).execute(
            RefreshSessionInput(refresh_token="refresh-token", user_agent=None, ip=None)
        )

    assert all(session.revoked_at is None for session in auth_port.sessions.values())


def test_request_password_reset_mails_link_and_ignores_unknown_email():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    mailer = FakeMailer()
    use_case = RequestPasswordResetUseCase(
        auth_port=auth_port,
        token_port=FakeTokenPort(),
        mailer=mailer,
        reset_url="https://app.test/reset-password",
        ttl_minutes=60,
    )

    use_case.execute(RequestPasswordResetInput(email="nobody@example.com"))
    assert mailer.sent == []

    use_case.execute(RequestPasswordResetInput(email="ALICE@example.com"))
    assert len(mailer.sent) == 1
    assert "https://app.test/reset-password?token=refresh-token" in mailer.sent[0]["body"]
    assert auth_port.get_password_reset_token_by_hash(token_hash="hash::refresh-token") is not None


def test_request_password_reset_hides_mail_delivery_failure():
    class FailingMailer:
        def send(self, *, to_email: str, subject: str, body: str, html_body: str | None = None) -> None:
            raise MailDeliveryError("Failed to send email.")

    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    use_case = RequestPasswordResetUseCase(
        auth_port=auth_port,
        token_port=FakeTokenPort(),
        mailer=FailingMailer(),
        reset_url="https://app.test/reset-password",
        ttl_minutes=60,
    )

    assert use_case.execute(RequestPasswordResetInput(email="alice@example.com")) is None


def test_reset_password_updates_hash_and_revokes_sessions():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")
    _login(auth_port)
    now = utcnow()
    auth_port.create_password_reset_token(
        token_id="reset-1",
        user_id="user-1",
        token_hash="hash::reset-token",
        expires_at=now + timedelta(hours=1),
        created_at=now,
    )
    use_case = ResetPasswordUseCase(
        auth_port=auth_port,
        token_port=FakeTokenPort(),
        password_hasher=FakePasswordHasher(),
    )

    use_case.execute(ResetPasswordInput(token="reset-token", new_password="new-secret-1"))

    identity = auth_port.get_identity_for_user_provider(user_id="user-1", provider="local")
    assert identity.password_hash == "hashed::new-secret-1"
    assert auth_port.reset_tokens["reset-1"].used_at is not None
    assert all(session.revoked_at is not None for session in auth_port.sessions.values())

    with pytest.raises(PasswordResetTokenInvalidError):
        use_case.execute(ResetPasswordInput(token="reset-token", new_password="new-secret-2"))


def test_reset_password_rejects_expired_token():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    now = utcnow()
    auth_port.create_password_reset_token(
        token_id="reset-1",
        user_id="user-1",
        token_hash="hash::reset-token",
        expires_at=now - timedelta(minutes=1),
        created_at=now - timedelta(hours=1),
    )
    use_case = ResetPasswordUseCase(
        auth_port=auth_port,
        token_port=FakeTokenPort(),
        password_hasher=FakePasswordHasher(),
    )

    with pytest.raises(PasswordResetTokenInvalidError):
        use_case.execute(ResetPasswordInput(token="reset-token", new_password="new-secret-1"))


def test_change_password_requires_current_password():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(), password_hash="hashed::secret-123")
    use_case = ChangePasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())

    with pytest.raises(InvalidCredentialsError):
        use_case.execute(ChangePasswordInput(user_id="user-1", current_password="nope-nope", new_password="another-1"))

    use_case.execute(ChangePasswordInput(user_id="user-1", current_password="secret-123", new_password="another-1"))
    identity = auth_port.get_identity_for_user_provider(user_id="user-1", provider="local")
    assert identity.password_hash == "hashed::another-1"


def test_delete_account_removes_user():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())

    DeleteAccountUseCase(auth_port=auth_port).execute(user_id="user-1")

    assert auth_port.get_user_by_id(user_id="user-1") is None
