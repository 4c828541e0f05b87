from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidCredentialsError(DomainError):
    """Email or password does not match."""


class EmailAlreadyExistsError(DomainError):
    """Another account already uses this email."""


class UserInactiveError(DomainError):
    """Account was deactivated."""


class UserBannedError(DomainError):
    """Account was banned by an administrator."""


class UserNotFoundError(DomainError):
    """Requested user does not exist."""


class RefreshSessionInvalidError(DomainError):
    """Refresh token is unknown, revoked or expired."""


class PasswordResetTokenInvalidError(DomainError):
    """Reset token is unknown, used or expired."""


class AdminAccessRequiredError(DomainError):
    """Operation is restricted to administrators."""


class UnknownFeatureError(DomainError):
    """Feature key is not part of the catalog."""


class FeatureDisabledError(DomainError):
    """Feature is disabled for the user's plan."""


class FeatureLimitExceededError(DomainError):
    """Daily limit for the feature was reached."""


class GenerationInputError(DomainError):
    """Invalid parameters for an AI tool."""


class EmptyGenerationError(DomainError):
    """AI response had no usable content after cleanup."""


class LlmConfigurationError(DomainError):
    """No API key configured for the completion API."""


class LlmRequestError(DomainError):
    """Completion API call failed."""


class PlanNotFoundError(DomainError):
    """Requested plan does not exist."""


class PlanConflictError(DomainError):
    """Plan name already in use."""


class FeatureLimitConflictError(DomainError):
    """Feature limit key already exists."""


class AnnouncementNotFoundError(DomainError):
    """Requested announcement does not exist."""


class AnnouncementInputError(DomainError):
    """Invalid announcement fields."""


class GoalNotFoundError(DomainError):
    """Requested goal does not exist."""


class GoalInputError(DomainError):
    """Invalid goal fields."""


class GoalConflictError(DomainError):
    """A goal with this title already exists."""


class GoalsTableMissingError(DomainError):
    """Goals table is not provisioned in the database."""


class SupportRelayError(DomainError):
    """Form relay rejected or failed the submission."""


class SupportConfigurationError(DomainError):
    """Form relay access key is not configured."""


class MailDeliveryError(DomainError):
    """Outgoing email could not be delivered."""


class BillingError(DomainError):
    """Payment provider operation failed."""


class VideoNotFoundError(DomainError):
    """YouTube returned no video for the id."""


class VideoLookupError(DomainError):
    """YouTube Data API call failed."""


class VideoLookupConfigurationError(DomainError):
    """No YouTube Data API key configured."""
