from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from smarttube.application.dto.billing import StripeCheckoutSessionResult, StripeWebhookEvent
from smarttube.domain.entities.content import ChatMessage
from smarttube.domain.entities.feature import FeatureLimit, FeatureUsage, UserLimits
from smarttube.domain.entities.payment import Payment
from smarttube.domain.entities.plan import Plan, UserPlan
from smarttube.domain.entities.user import AuthIdentity, AuthSession, PasswordResetToken, User


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = date(2026, 3, 10)


def make_user(
    *,
    user_id: str = "user-1",
    email: str = "alice@example.com",
    role: str = "user",
    is_active: bool = True,
    is_banned: bool = False,
    stripe_customer_id: str | None = None,
) -> User:
    return User(
        id=user_id,
        full_name="Alice",
        email=email,
        avatar_url=None,
        role=role,
        email_verified=True,
        is_active=is_active,
        is_banned=is_banned,
        stripe_customer_id=stripe_customer_id,
        created_at=NOW,
        updated_at=NOW,
    )


def make_plan(
    *,
    plan_id: str = "plan-free",
    name: str = "Free",
    price: str = "0",
    features: dict[str, int] | None = None,
    stripe_price_id: str | None = None,
    user_count: int = 0,
) -> Plan:
    return Plan(
        id=plan_id,
        name=name,
        price=Decimal(price),
        description=None,
        features=dict(features or {}),
        is_active=True,
        stripe_price_id=stripe_price_id,
        created_at=NOW,
        user_count=user_count,
    )


class FakeAuthPort:
    def __init__(self):
        self.users: dict[str, User] = {}
        self.identities: dict[str, AuthIdentity] = {}
        self.sessions: dict[str, AuthSession] = {}
        self.reset_tokens: dict[str, PasswordResetToken] = {}

    def execute_in_transaction(self, fn):
        return fn(self)

    def add_user(self, user: User, *, password_hash: str | None = None) -> User:
        self.users[user.id] = user
        if password_hash is not None:
            self.create_identity(
                identity_id=f"identity-{user.id}",
                user_id=user.id,
                provider="local",
                password_hash=password_hash,
                created_at=NOW,
            )
        return user

    def get_user_by_id(self, *, user_id: str) -> User | None:
        return self.users.get(user_id)

    def get_user_by_email(self, *, email: str) -> User | None:
        email_l = email.lower()
        for user in self.users.values():
            if user.email.lower() == email_l:
                return user
        return None

    def get_user_by_stripe_customer_id(self, *, stripe_customer_id: str) -> User | None:
        for user in self.users.values():
            if user.stripe_customer_id == stripe_customer_id:
                return user
        return None

    def create_user(
        self,
        *,
        user_id: str,
        full_name: str,
        email: str,
        role: str,
        email_verified: bool,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> User:
        user = User(
            id=user_id,
            full_name=full_name,
            email=email,
            avatar_url=None,
            role=role,
            email_verified=email_verified,
            is_active=is_active,
            is_banned=False,
            stripe_customer_id=None,
            created_at=created_at,
            updated_at=updated_at,
        )
        self.users[user.id] = user
        return user

    def update_user_profile(self, *, user_id: str, full_name: str, avatar_url: str | None) -> User:
        self.users[user_id] = replace(self.users[user_id], full_name=full_name, avatar_url=avatar_url)
        return self.users[user_id]

    def update_user_role(self, *, user_id: str, role: str) -> None:
        self.users[user_id] = replace(self.users[user_id], role=role)

    def update_user_stripe_customer_id(self, *, user_id: str, stripe_customer_id: str) -> None:
        self.users[user_id] = replace(self.users[user_id], stripe_customer_id=stripe_customer_id)

    def delete_user(self, *, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    def create_identity(
        self,
        *,
        identity_id: str,
        user_id: str,
        provider: str,
        password_hash: str | None,
        created_at: datetime,
    ) -> AuthIdentity:
        identity = AuthIdentity(
            id=identity_id,
            user_id=user_id,
            provider=provider,
            password_hash=password_hash,
            created_at=created_at,
        )
        self.identities[identity.id] = identity
        return identity

    def get_identity_for_user_provider(self, *, user_id: str, provider: str) -> AuthIdentity | None:
        for identity in self.identities.values():
            if identity.user_id == user_id and identity.provider == provider:
                return identity
        return None

    def update_identity_password_hash(self, *, identity_id: str, password_hash: str) -> None:
        self.identities[identity_id] = replace(self.identities[identity_id], password_hash=password_hash)

    def get_local_identity_by_email(self, *, email: str) -> tuple[User, AuthIdentity] | None:
        user = self.get_user_by_email(email=email)
        if user is None:
            return None
        identity = self.get_identity_for_user_provider(user_id=user.id, provider="local")
        if identity is None:
            return None
        return user, identity

    def create_session(
        self,
        *,
        session_id: str,
        user_id: str,
        refresh_token_hash: str,
        expires_at: datetime,
        revoked_at: datetime | None,
        user_agent: str | None,
        ip: str | None,
        created_at: datetime,
    ) -> AuthSession:
        session = AuthSession(
            id=session_id,
            user_id=user_id,
            refresh_token_hash=refresh_token_hash,
            expires_at=expires_at,
            revoked_at=revoked_at,
            user_agent=user_agent,
            ip=ip,
            created_at=created_at,
        )
        self.sessions[session.id] = session
        return session

    def get_session_by_refresh_token_hash(self, *, refresh_token_hash: str) -> AuthSession | None:
        for session in self.sessions.values():
            if session.refresh_token_hash == refresh_token_hash:
                return session
        return None

    def revoke_session(self, *, session_id: str, revoked_at: datetime) -> None:
        self.sessions[session_id] = replace(self.sessions[session_id], revoked_at=revoked_at)

    def revoke_user_sessions(self, *, user_id: str, revoked_at: datetime) -> None:
        for session in list(self.sessions.values()):
            if session.user_id == user_id and session.revoked_at is None:
                self.sessions[session.id] = replace(session, revoked_at=revoked_at)

    def create_password_reset_token(
        self,
        *,
        token_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> PasswordResetToken:
        token = PasswordResetToken(
            id=token_id,
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            used_at=None,
            created_at=created_at,
        )
        self.reset_tokens[token.id] = token
        return token

    def get_password_reset_token_by_hash(self, *, token_hash: str) -> PasswordResetToken | None:
        for token in self.reset_tokens.values():
            if token.token_hash == token_hash:
                return token
        return None

    def mark_password_reset_token_used(self, *, token_id: str, used_at: datetime) -> None:
        self.reset_tokens[token_id] = replace(self.reset_tokens[token_id], used_at=used_at)

    # user directory

    def list_users(self, *, search: str | None, offset: int, limit: int) -> tuple[list[User], int]:
        users = sorted(self.users.values(), key=lambda user: user.email)
        if search:
            needle = search.lower()
            users = [user for user in users if needle in user.email.lower() or needle in user.full_name.lower()]
        return users[offset : offset + limit], len(users)

    def set_user_role(self, *, user_id: str, role: str) -> User | None:
        if user_id not in self.users:
            return None
        self.update_user_role(user_id=user_id, role=role)
        return self.users[user_id]

    def set_user_banned(self, *, user_id: str, is_banned: bool) -> User | None:
        if user_id not in self.users:
            return None
        self.users[user_id] = replace(self.users[user_id], is_banned=is_banned)
        return self.users[user_id]

    def update_user(self, *, user_id: str, full_name: str, email: str, role: str) -> User | None:
        if user_id not in self.users:
            return None
        self.users[user_id] = replace(self.users[user_id], full_name=full_name, email=email, role=role)
        return self.users[user_id]


class FakePasswordHasher:
    def hash(self, plain_password: str) -> str:
        return f"hashed::{plain_password}"

    def verify(self, plain_password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{plain_password}"

    def verify_and_update(self, plain_password: str, password_hash: str) -> tuple[bool, str | None]:
        return self.verify(plain_password, password_hash), None


class FakeTokenPort:
    def create_access_token(self, *, user_id: str, role: str, now: datetime) -> tuple[str, datetime]:
        return f"access-{user_id}", now + timedelta(minutes=15)

    def decode_access_token(self, *, token: str):
        _ = token
        raise NotImplementedError

    def new_opaque_token(self) -> str:
        return "refresh-token"

    def digest_token(self, *, token: str) -> str:
        return f"hash::{token}"

    def session_expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(days=30)


class FakeUsagePort:
    def __init__(self, limits: UserLimits | None = None):
        self.limits = limits
        self.usage: dict[tuple[str, str], FeatureUsage] = {}
        self.saved: list[FeatureUsage] = []

    def get_user_limits(self, *, user_id: str) -> UserLimits | None:
        return self.limits

    def get_usage(self, *, user_id: str, feature: str) -> FeatureUsage | None:
        return self.usage.get((user_id, feature))

    def list_usage(self, *, user_id: str) -> list[FeatureUsage]:
        return [usage for (owner, _), usage in self.usage.items() if owner == user_id]

    def save_usage(self, *, usage: FeatureUsage) -> None:
        self.usage[(usage.user_id, usage.feature)] = usage
        self.saved.append(usage)


class FakeLlm:
    def __init__(self, content: str = ""):
        self.content = content
        self.calls: list[tuple[list[ChatMessage], int | None]] = []

    def complete(self, *, messages: list[ChatMessage], max_tokens: int | None = None) -> str:
        self.calls.append((messages, max_tokens))
        return self.content


class FakePlanPort:
    def __init__(self, plans: list[Plan] | None = None):
        self.plans: dict[str, Plan] = {plan.id: plan for plan in plans or []}
        self.user_plans: dict[str, UserPlan] = {}
        self.feature_limits: dict[str, FeatureLimit] = {}
        self.renamed: list[tuple[str, str, bool]] = []

    def list_plans(self) -> list[Plan]:
        return sorted(self.plans.values(), key=lambda plan: plan.price)

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        return self.plans.get(plan_id)

    def get_plan_by_name(self, *, name: str) -> Plan | None:
        return next((plan for plan in self.plans.values() if plan.name == name), None)

    def get_plan_by_stripe_price_id(self, *, stripe_price_id: str) -> Plan | None:
        return next((plan for plan in self.plans.values() if plan.stripe_price_id == stripe_price_id), None)

    def list_plan_ids_by_name(self) -> dict[str, str]:
        return {plan.name: plan.id for plan in self.plans.values()}

    def create_plan(self, *, plan_id, name, price, description, features, is_active, stripe_price_id, created_at):
        plan = Plan(
            id=plan_id,
            name=name,
            price=price,
            description=description,
            features=dict(features),
            is_active=is_active,
            stripe_price_id=stripe_price_id,
            created_at=created_at,
        )
        self.plans[plan_id] = plan
        return plan

    def update_plan(self, *, plan_id, name, price, description, features, is_active, stripe_price_id):
        if plan_id not in self.plans:
            return None
        self.plans[plan_id] = replace(
            self.plans[plan_id],
            name=name,
            price=price,
            description=description,
            features=dict(features),
            is_active=is_active,
            stripe_price_id=stripe_price_id,
        )
        return self.plans[plan_id]

    def rename_plan(self, *, plan_id: str, name: str, is_active: bool) -> None:
        self.renamed.append((plan_id, name, is_active))
        self.plans[plan_id] = replace(self.plans[plan_id], name=name, is_active=is_active)

    def set_plan_active(self, *, plan_id: str, is_active: bool) -> Plan | None:
        if plan_id not in self.plans:
            return None
        self.plans[plan_id] = replace(self.plans[plan_id], is_active=is_active)
        return self.plans[plan_id]

    def update_plan_features(self, *, plan_id: str, features: dict[str, int]) -> Plan | None:
        if plan_id not in self.plans:
            return None
        self.plans[plan_id] = replace(self.plans[plan_id], features=dict(features))
        return self.plans[plan_id]

    def delete_plan(self, *, plan_id: str) -> bool:
        return self.plans.pop(plan_id, None) is not None

    def list_feature_limits(self) -> list[FeatureLimit]:
        return list(self.feature_limits.values())

    def get_feature_limit_by_key(self, *, key: str) -> FeatureLimit | None:
        return next((item for item in self.feature_limits.values() if item.key == key), None)

    def create_feature_limit(self, *, feature_limit_id, key, name, description, default_value):
        item = FeatureLimit(
            id=feature_limit_id,
            key=key,
            name=name,
            description=description,
            default_value=default_value,
        )
        self.feature_limits[item.id] = item
        return item

    def upsert_user_plan(self, *, user_id, plan_id, expiry, custom_limits) -> UserPlan:
        user_plan = UserPlan(user_id=user_id, plan_id=plan_id, expiry=expiry, custom_limits=dict(custom_limits))
        self.user_plans[user_id] = user_plan
        return user_plan


class FakePaymentsPort:
    def __init__(self):
        self.payments: list[Payment] = []

    def create_payment(
        self,
        *,
        payment_id,
        user_id,
        plan_id,
        amount_cents,
        currency,
        status,
        provider,
        provider_id,
        created_at,
    ) -> Payment:
        payment = Payment(
            id=payment_id,
            user_id=user_id,
            plan_id=plan_id,
            amount_cents=amount_cents,
            currency=currency,
            status=status,
            provider=provider,
            provider_id=provider_id,
            created_at=created_at,
        )
        self.payments.append(payment)
        return payment

    def list_payments(self, *, search, statuses, start, end, offset, limit):
        items = [payment for payment in self.payments if not statuses or payment.status in statuses]
        return items[offset : offset + limit], len(items)


class FakeStripePort:
    def __init__(self, event: StripeWebhookEvent | None = None):
        self.event = event
        self.created_customers: list[str] = []
        self.sessions: list[dict] = []

    def create_customer(self, *, user: User) -> str:
        self.created_customers.append(user.id)
        return f"cus_{user.id}"

    def create_plan_checkout(self, **kwargs) -> StripeCheckoutSessionResult:
        self.sessions.append(kwargs)
        return StripeCheckoutSessionResult(id="cs_test_1", url="https://checkout.stripe.test/cs_test_1")

    def parse_webhook_event(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        assert self.event is not None
        return self.event
