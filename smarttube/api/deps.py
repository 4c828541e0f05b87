from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from smarttube.application.use_cases.admin_dashboard import GetDashboardStatsUseCase
from smarttube.application.use_cases.admin_limits import (
    AssignUserPlanUseCase,
    CreateFeatureLimitUseCase,
    ListFeatureLimitsUseCase,
    SetPlanLimitsUseCase,
)
from smarttube.application.use_cases.admin_payments import ListPaymentsUseCase
from smarttube.application.use_cases.admin_plans import (
    CreatePlanUseCase,
    DeletePlanUseCase,
    ListPlansUseCase,
    SyncPlanCatalogUseCase,
    TogglePlanUseCase,
    UpdatePlanUseCase,
)
from smarttube.application.use_cases.admin_settings import (
    GetPublicSettingsUseCase,
    GetSettingsUseCase,
    SaveSettingsUseCase,
)
from smarttube.application.use_cases.admin_users import (
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleAdminUseCase,
    ToggleBanUseCase,
    UpdateUserUseCase,
)
from smarttube.application.use_cases.analyze_video_seo import AnalyzeVideoSeoUseCase
from smarttube.application.use_cases.announcements import (
    CreateAnnouncementUseCase,
    DeleteAnnouncementUseCase,
    ListActiveAnnouncementsUseCase,
    ListAnnouncementsUseCase,
    ToggleAnnouncementUseCase,
    UpdateAnnouncementUseCase,
)
from smarttube.application.use_cases.channel_goals import (
    CompleteGoalUseCase,
    CreateGoalUseCase,
    DeleteGoalUseCase,
    GoalStore,
    ListGoalsUseCase,
    UpdateGoalProgressUseCase,
)
from smarttube.application.use_cases.compare_titles import CompareTitlesUseCase
from smarttube.application.use_cases.content_generation import GatedGeneration
from smarttube.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from smarttube.application.use_cases.feature_gate import FeatureGate
from smarttube.application.use_cases.feature_usage import (
    CheckFeatureUseCase,
    GetFeatureUsageUseCase,
    UseFeatureUseCase,
)
from smarttube.application.use_cases.generate_description import GenerateDescriptionUseCase
from smarttube.application.use_cases.generate_hashtags import GenerateHashtagsUseCase
from smarttube.application.use_cases.generate_hooks import GenerateHooksUseCase
from smarttube.application.use_cases.generate_keywords import GenerateKeywordsUseCase
from smarttube.application.use_cases.generate_script import GenerateScriptUseCase
from smarttube.application.use_cases.generate_titles import GenerateTitlesUseCase
from smarttube.application.use_cases.generate_video_ideas import GenerateVideoIdeasUseCase
from smarttube.application.use_cases.get_me import GetMeUseCase
from smarttube.application.use_cases.login_local import LoginLocalUseCase
from smarttube.application.use_cases.logout_session import LogoutSessionUseCase
from smarttube.application.use_cases.manage_account import (
    ChangePasswordUseCase,
    DeleteAccountUseCase,
    UpdateProfileUseCase,
)
from smarttube.application.use_cases.optimize_description import OptimizeDescriptionUseCase
from smarttube.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from smarttube.application.use_cases.refresh_session import RefreshSessionUseCase
from smarttube.application.use_cases.register_user import RegisterUserUseCase
from smarttube.application.use_cases.request_password_reset import RequestPasswordResetUseCase
from smarttube.application.use_cases.reset_password import ResetPasswordUseCase
from smarttube.application.use_cases.submit_support_form import SubmitSupportFormUseCase
from smarttube.domain.entities.user import User
from smarttube.infrastructure.db.engine import get_engine
from smarttube.infrastructure.db.repositories.accounts_repository import SqlAccountsRepository
from smarttube.infrastructure.db.repositories.admin_stats_repository import SqlAdminStatsRepository
from smarttube.infrastructure.db.repositories.announcements_repository import SqlAnnouncementsRepository
from smarttube.infrastructure.db.repositories.goals_repository import SqlGoalsRepository
from smarttube.infrastructure.db.repositories.payments_repository import SqlPaymentsRepository
from smarttube.infrastructure.db.repositories.plans_repository import SqlPlansRepository
from smarttube.infrastructure.db.repositories.settings_repository import SqlSettingsRepository
from smarttube.infrastructure.db.repositories.usage_repository import SqlUsageRepository
from smarttube.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_accounts_repository() -> SqlAccountsRepository:
    return SqlAccountsRepository(_get_db_engine())


def _get_plans_repository() -> SqlPlansRepository:
    return SqlPlansRepository(_get_db_engine())


def _get_settings_repository() -> SqlSettingsRepository:
    return SqlSettingsRepository(_get_db_engine())


def _get_announcements_repository() -> SqlAnnouncementsRepository:
    return SqlAnnouncementsRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> "PasswordHasher":
    from smarttube.infrastructure.security.password_hasher import PasswordHasher

    return PasswordHasher()


@lru_cache(maxsize=1)
def _get_token_service() -> "JwtTokenService":
    from smarttube.infrastructure.security.token_service import JwtTokenService

    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
        refresh_ttl_days=settings.jwt_refresh_ttl_days,
    )


def _get_llm_client() -> "OpenRouterClient":
    from smarttube.infrastructure.clients.openrouter_client import (
        OpenRouterClient,
        OpenRouterClientSettings,
    )

    settings = get_settings()
    stored_key_provider = None
    if settings.postgres_dsn:
        stored_key_provider = _get_settings_repository().get_openrouter_api_key
    return OpenRouterClient(
        OpenRouterClientSettings(
            api_base=settings.openrouter_api_base,
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            timeout_seconds=settings.openrouter_timeout_seconds,
            referer=settings.app_public_url,
            title=settings.app_title,
        ),
        stored_key_provider=stored_key_provider,
    )


@lru_cache(maxsize=1)
def _get_video_lookup_client() -> "YouTubeDataClient":
    from smarttube.infrastructure.clients.youtube_data_client import (
        YouTubeDataClient,
        YouTubeDataClientSettings,
    )

    settings = get_settings()
    return YouTubeDataClient(
        YouTubeDataClientSettings(
            api_base=settings.youtube_api_base,
            api_key=settings.youtube_api_key,
            timeout_seconds=settings.youtube_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_form_relay_client() -> "FormRelayClient":
    from smarttube.infrastructure.clients.form_relay_client import FormRelayClient

    settings = get_settings()
    return FormRelayClient(
        url=settings.form_relay_url,
        access_key=settings.form_relay_access_key,
        timeout_seconds=settings.form_relay_timeout_seconds,
    )


@lru_cache(maxsize=1)
def _get_mailer() -> "SmtpMailer":
    from smarttube.infrastructure.clients.smtp_mailer import SmtpMailer

    settings = get_settings()
    if not settings.smtp_host or not settings.smtp_from_email:
        raise HTTPException(status_code=503, detail="SMTP_HOST and SMTP_FROM_EMAIL are required.")
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        from_email=settings.smtp_from_email,
        use_tls=settings.smtp_use_tls,
    )


@lru_cache(maxsize=1)
def _get_stripe_client() -> "StripeClient":
    from smarttube.infrastructure.clients.stripe_client import StripeClient

    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=503, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=503, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


@lru_cache(maxsize=1)
def _get_json_goal_store() -> "JsonGoalStore":
    from smarttube.infrastructure.storage.json_goal_store import JsonGoalStore

    return JsonGoalStore(base_dir=get_settings().local_store_dir)


def get_feature_gate() -> FeatureGate:
    return FeatureGate(usage_port=SqlUsageRepository(_get_db_engine()))


def get_gated_generation() -> GatedGeneration:
    return GatedGeneration(llm=_get_llm_client(), feature_gate=get_feature_gate())


# Auth and account

def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        auth_port=_get_accounts_repository(),
        password_hasher=_get_password_hasher(),
        admin_emails=get_settings().admin_emails,
    )


def get_login_local_use_case() -> LoginLocalUseCase:
    return LoginLocalUseCase(
        auth_port=_get_accounts_repository(),
        password_hasher=_get_password_hasher(),
        token_port=_get_token_service(),
        admin_emails=get_settings().admin_emails,
    )


def get_refresh_session_use_case() -> RefreshSessionUseCase:
    return RefreshSessionUseCase(
        auth_port=_get_accounts_repository(),
        token_port=_get_token_service(),
    )


def get_logout_session_use_case() -> LogoutSessionUseCase:
    return LogoutSessionUseCase(
        auth_port=_get_accounts_repository(),
        token_port=_get_token_service(),
    )


def get_request_password_reset_use_case() -> RequestPasswordResetUseCase:
    settings = get_settings()
    return RequestPasswordResetUseCase(
        auth_port=_get_accounts_repository(),
        token_port=_get_token_service(),
        mailer=_get_mailer(),
        reset_url=settings.password_reset_url,
        ttl_minutes=settings.password_reset_ttl_minutes,
    )


def get_reset_password_use_case() -> ResetPasswordUseCase:
    return ResetPasswordUseCase(
        auth_port=_get_accounts_repository(),
        token_port=_get_token_service(),
        password_hasher=_get_password_hasher(),
    )


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(auth_port=_get_accounts_repository())


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(
        auth_port=_get_accounts_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_delete_account_use_case() -> DeleteAccountUseCase:
    return DeleteAccountUseCase(auth_port=_get_accounts_repository())


# Usage and dashboard

def get_get_feature_usage_use_case() -> GetFeatureUsageUseCase:
    return GetFeatureUsageUseCase(feature_gate=get_feature_gate())


def get_check_feature_use_case() -> CheckFeatureUseCase:
    return CheckFeatureUseCase(feature_gate=get_feature_gate())


def get_use_feature_use_case() -> UseFeatureUseCase:
    return UseFeatureUseCase(feature_gate=get_feature_gate())


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase(get_feature_usage_use_case=get_get_feature_usage_use_case())


# AI tools

def get_generate_titles_use_case() -> GenerateTitlesUseCase:
    return GenerateTitlesUseCase(generation=get_gated_generation())


def get_generate_description_use_case() -> GenerateDescriptionUseCase:
    return GenerateDescriptionUseCase(generation=get_gated_generation())


def get_generate_hashtags_use_case() -> GenerateHashtagsUseCase:
    return GenerateHashtagsUseCase(generation=get_gated_generation())


def get_generate_keywords_use_case() -> GenerateKeywordsUseCase:
    return GenerateKeywordsUseCase(generation=get_gated_generation())


def get_generate_hooks_use_case() -> GenerateHooksUseCase:
    return GenerateHooksUseCase(generation=get_gated_generation())


def get_compare_titles_use_case() -> CompareTitlesUseCase:
    return CompareTitlesUseCase(generation=get_gated_generation())


def get_optimize_description_use_case() -> OptimizeDescriptionUseCase:
    return OptimizeDescriptionUseCase(generation=get_gated_generation())


def get_generate_script_use_case() -> GenerateScriptUseCase:
    return GenerateScriptUseCase(generation=get_gated_generation())


def get_generate_video_ideas_use_case() -> GenerateVideoIdeasUseCase:
    return GenerateVideoIdeasUseCase(generation=get_gated_generation())


def get_analyze_video_seo_use_case() -> AnalyzeVideoSeoUseCase:
    return AnalyzeVideoSeoUseCase(feature_gate=get_feature_gate(), video_lookup=_get_video_lookup_client())


# Goals

def get_goal_store() -> GoalStore:
    return GoalStore(
        goals_port=SqlGoalsRepository(_get_db_engine()),
        fallback_port=_get_json_goal_store(),
    )


def get_list_goals_use_case() -> ListGoalsUseCase:
    return ListGoalsUseCase(goal_store=get_goal_store())


def get_create_goal_use_case() -> CreateGoalUseCase:
    return CreateGoalUseCase(goal_store=get_goal_store())


def get_update_goal_progress_use_case() -> UpdateGoalProgressUseCase:
    return UpdateGoalProgressUseCase(goal_store=get_goal_store())


def get_complete_goal_use_case() -> CompleteGoalUseCase:
    return CompleteGoalUseCase(goal_store=get_goal_store())


def get_delete_goal_use_case() -> DeleteGoalUseCase:
    return DeleteGoalUseCase(goal_store=get_goal_store())


# Announcements, support and public settings

def get_list_active_announcements_use_case() -> ListActiveAnnouncementsUseCase:
    return ListActiveAnnouncementsUseCase(announcements_port=_get_announcements_repository())


def get_list_announcements_use_case() -> ListAnnouncementsUseCase:
    return ListAnnouncementsUseCase(announcements_port=_get_announcements_repository())


def get_create_announcement_use_case() -> CreateAnnouncementUseCase:
    return CreateAnnouncementUseCase(announcements_port=_get_announcements_repository())


def get_update_announcement_use_case() -> UpdateAnnouncementUseCase:
    return UpdateAnnouncementUseCase(announcements_port=_get_announcements_repository())


def get_toggle_announcement_use_case() -> ToggleAnnouncementUseCase:
    return ToggleAnnouncementUseCase(announcements_port=_get_announcements_repository())


def get_delete_announcement_use_case() -> DeleteAnnouncementUseCase:
    return DeleteAnnouncementUseCase(announcements_port=_get_announcements_repository())


def get_submit_support_form_use_case() -> SubmitSupportFormUseCase:
    return SubmitSupportFormUseCase(
        form_relay=_get_form_relay_client(),
        feature_gate=get_feature_gate(),
    )


def get_get_public_settings_use_case() -> GetPublicSettingsUseCase:
    return GetPublicSettingsUseCase(settings_port=_get_settings_repository())


# Admin

def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(user_directory=_get_accounts_repository())


def get_toggle_admin_use_case() -> ToggleAdminUseCase:
    return ToggleAdminUseCase(user_directory=_get_accounts_repository())


def get_toggle_ban_use_case() -> ToggleBanUseCase:
    return ToggleBanUseCase(user_directory=_get_accounts_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(user_directory=_get_accounts_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(user_directory=_get_accounts_repository())


def get_list_plans_use_case() -> ListPlansUseCase:
    return ListPlansUseCase(plan_port=_get_plans_repository())


def get_create_plan_use_case() -> CreatePlanUseCase:
    return CreatePlanUseCase(plan_port=_get_plans_repository())


def get_update_plan_use_case() -> UpdatePlanUseCase:
    return UpdatePlanUseCase(plan_port=_get_plans_repository())


def get_toggle_plan_use_case() -> TogglePlanUseCase:
    return TogglePlanUseCase(plan_port=_get_plans_repository())


def get_delete_plan_use_case() -> DeletePlanUseCase:
    return DeletePlanUseCase(plan_port=_get_plans_repository())


def get_sync_plan_catalog_use_case() -> SyncPlanCatalogUseCase:
    return SyncPlanCatalogUseCase(plan_port=_get_plans_repository())


def get_list_feature_limits_use_case() -> ListFeatureLimitsUseCase:
    return ListFeatureLimitsUseCase(plan_port=_get_plans_repository())


def get_create_feature_limit_use_case() -> CreateFeatureLimitUseCase:
    return CreateFeatureLimitUseCase(plan_port=_get_plans_repository())


def get_set_plan_limits_use_case() -> SetPlanLimitsUseCase:
    return SetPlanLimitsUseCase(plan_port=_get_plans_repository())


def get_assign_user_plan_use_case() -> AssignUserPlanUseCase:
    return AssignUserPlanUseCase(
        plan_port=_get_plans_repository(),
        auth_port=_get_accounts_repository(),
    )


def get_list_payments_use_case() -> ListPaymentsUseCase:
    return ListPaymentsUseCase(payments_port=SqlPaymentsRepository(_get_db_engine()))


def get_get_settings_use_case() -> GetSettingsUseCase:
    return GetSettingsUseCase(settings_port=_get_settings_repository())


def get_save_settings_use_case() -> SaveSettingsUseCase:
    return SaveSettingsUseCase(settings_port=_get_settings_repository())


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase(admin_stats_port=SqlAdminStatsRepository(_get_db_engine()))


# Billing

def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        auth_port=_get_accounts_repository(),
        plan_port=_get_plans_repository(),
        stripe_port=_get_stripe_client(),
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        auth_port=_get_accounts_repository(),
        plan_port=_get_plans_repository(),
        payments_port=SqlPaymentsRepository(_get_db_engine()),
        stripe_port=_get_stripe_client(),
    )


# Current user

def _user_from_authorization(authorization: str) -> User:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    token_service = _get_token_service()
    auth_port = _get_accounts_repository()

    try:
        payload = token_service.decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = auth_port.get_user_by_id(user_id=payload.user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found.")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User is inactive.")
    if user.is_banned:
        raise HTTPException(status_code=403, detail="User is banned.")
    return user


def get_current_user(
    authorization: str = Header(...),
) -> User:
    return _user_from_authorization(authorization)


def get_optional_user(
    authorization: str | None = Header(default=None),
) -> User | None:
    if not authorization:
        return None
    return _user_from_authorization(authorization)


def require_admin(
    user: User = Depends(get_current_user),
) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required.")
    return user
