from enum import Enum


class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ActivationErrorKind(str, Enum):
    INVALID_PARAMETERS = "invalid_parameters"
    TOKEN_GENERATION = "token_generation"
    NOTIFICATION = "notification"


class ActivationError(DomainError):
    """A pending-activation or resend request was refused."""

    kind: ActivationErrorKind = ActivationErrorKind.INVALID_PARAMETERS


class InvalidParameters(ActivationError):
    """Missing input, unknown or non-pending user, or a wrong check-code."""

    kind = ActivationErrorKind.INVALID_PARAMETERS


class TokenGenerationError(ActivationError):
    """The token store could not produce a valid confirm token."""

    kind = ActivationErrorKind.TOKEN_GENERATION


class NotificationError(ActivationError):
    """The activation email could not be handed over for delivery."""

    kind = ActivationErrorKind.NOTIFICATION
