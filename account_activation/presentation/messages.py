from account_activation.domain.errors import ActivationErrorKind

INVALID_PARAMETERS = "Invalid parameters. Please use the link you received and try again."
GENERATE_CONFIRM_TOKEN_ERROR = (
    "Could not generate an activation token. Please try again later."
)
ACTIVATION_NOT_SENT = "The activation email could not be sent. Please try again."
ACTIVATION_RESENT = "A new activation email was sent to {email}."
SIGN_IN_REQUIRED = "Please sign in to continue."

_ERROR_MESSAGES: dict[ActivationErrorKind, str] = {
    ActivationErrorKind.INVALID_PARAMETERS: INVALID_PARAMETERS,
    ActivationErrorKind.TOKEN_GENERATION: GENERATE_CONFIRM_TOKEN_ERROR,
    ActivationErrorKind.NOTIFICATION: ACTIVATION_NOT_SENT,
}


def error_message(kind: ActivationErrorKind) -> str:
    return _ERROR_MESSAGES[kind]
