import account_activation.domain.services as domain_services
from account_activation.application.activation_flow import SALT_KEY, SESSION_NAMESPACE
from account_activation.domain.entities import User
from account_activation.domain.ports.session_store import SessionStorePort
from account_activation.domain.services import CheckCodeAlgorithm


async def begin_pending_activation(
    session: SessionStorePort,
    user: User,
    algorithm: CheckCodeAlgorithm = "sha1",
) -> str:
    """
    Store a fresh salt in the session and return the check-code for the
    pending-activation link. Any earlier link of this session stops working.
    """
    salt = domain_services.generate_salt()
    await session.set(SESSION_NAMESPACE, SALT_KEY, salt)
    return domain_services.compute_check_code(
        user.email, user.password_hash, salt, algorithm
    )
