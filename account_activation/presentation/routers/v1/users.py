import logging
from typing import Annotated, Callable
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from account_activation.application.activation_flow import (
    resend_activation,
    verify_pending_activation,
)
from account_activation.application.begin_pending_activation import (
    begin_pending_activation,
)
from account_activation.domain.errors import ActivationError
from account_activation.domain.ports.notifier import ActivationNotifierPort
from account_activation.domain.ports.token_store import TokenStorePort
from account_activation.domain.ports.user_directory import UserDirectoryPort
from account_activation.domain.services import CheckCodeAlgorithm
from account_activation.infrastructure.redis_cache.session_store import (
    RedisSessionStore,
)
from account_activation.presentation import messages
from account_activation.presentation.dependencies import (
    get_check_code_algorithm,
    get_notifier,
    get_session,
    get_token_store,
    get_user_directory,
    get_verify_password,
)
from account_activation.presentation.flash import FlashMessenger
from account_activation.schemas.responses import (
    AccountPageOut,
    FlashOut,
    LoginPageOut,
    OkOut,
    PendingActivationOut,
)
from account_activation.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])
security = HTTPBasic()

AUTH_NAMESPACE = "auth"


def _with_session_cookie(response: Response, session: RedisSessionStore) -> Response:
    if session.is_new:
        settings = get_settings()
        response.set_cookie(
            settings.session_cookie_name,
            session.session_id,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            samesite="lax",
        )
    return response


async def _redirect_to_login(
    request: Request, session: RedisSessionStore, *, error: str | None = None
) -> Response:
    if error:
        await FlashMessenger(session).add_error(error)
    response = RedirectResponse(
        str(request.url_for("get_login_page")), status_code=status.HTTP_303_SEE_OTHER
    )
    return _with_session_cookie(response, session)


@router.get("/pending-activation", response_model=PendingActivationOut)
async def get_pending_activation(
    request: Request,
    users: Annotated[UserDirectoryPort, Depends(get_user_directory)],
    tokens: Annotated[TokenStorePort, Depends(get_token_store)],
    session: Annotated[RedisSessionStore, Depends(get_session)],
    algorithm: Annotated[CheckCodeAlgorithm, Depends(get_check_code_algorithm)],
    email: str = Query(""),
    check: str = Query(""),
):
    try:
        pending = await verify_pending_activation(
            users=users,
            tokens=tokens,
            session=session,
            email=email,
            check=check,
            algorithm=algorithm,
        )
    except ActivationError as e:
        return await _redirect_to_login(
            request, session, error=messages.error_message(e.kind)
        )

    resend_uri = request.app.url_path_for("get_resend_activation")
    return PendingActivationOut(
        email=pending.email,
        resend_activation_uri=f"{resend_uri}?{pending.resend_query()}",
    )


@router.get("/resend-activation")
async def get_resend_activation(
    request: Request,
    users: Annotated[UserDirectoryPort, Depends(get_user_directory)],
    tokens: Annotated[TokenStorePort, Depends(get_token_store)],
    notifier: Annotated[ActivationNotifierPort, Depends(get_notifier)],
    session: Annotated[RedisSessionStore, Depends(get_session)],
    algorithm: Annotated[CheckCodeAlgorithm, Depends(get_check_code_algorithm)],
    email: str = Query(""),
    check: str = Query(""),
):
    try:
        sent_to = await resend_activation(
            users=users,
            tokens=tokens,
            notifier=notifier,
            session=session,
            email=email,
            check=check,
            algorithm=algorithm,
        )
    except ActivationError as e:
        return await _redirect_to_login(
            request, session, error=messages.error_message(e.kind)
        )

    await FlashMessenger(session).add_success(
        messages.ACTIVATION_RESENT.format(email=sent_to)
    )
    return await _redirect_to_login(request, session)


@router.get("/login", response_model=LoginPageOut)
async def get_login_page(
    session: Annotated[RedisSessionStore, Depends(get_session)],
):
    flashes = await FlashMessenger(session).messages()
    page = LoginPageOut(messages=[FlashOut(**f) for f in flashes])
    return _with_session_cookie(JSONResponse(page.model_dump()), session)


@router.post("/login", response_model=OkOut)
async def post_login(
    request: Request,
    users: Annotated[UserDirectoryPort, Depends(get_user_directory)],
    session: Annotated[RedisSessionStore, Depends(get_session)],
    algorithm: Annotated[CheckCodeAlgorithm, Depends(get_check_code_algorithm)],
    verify_password: Annotated[Callable[[str, str], bool], Depends(get_verify_password)],
    creds: HTTPBasicCredentials = Depends(security),
):
    user = await users.find_by_email(creds.username.strip().lower())
    if (
        not user
        or user.status == "locked"
        or not verify_password(creds.password, user.password_hash)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials"
        )

    if user.is_pending:
        check = await begin_pending_activation(session, user, algorithm)
        query = urlencode({"email": user.email, "check": check})
        logger.info("login of pending user", extra={"user_id": user.id})
        response = RedirectResponse(
            f"{request.url_for('get_pending_activation')}?{query}",
            status_code=status.HTTP_303_SEE_OTHER,
        )
        return _with_session_cookie(response, session)

    await session.set(AUTH_NAMESPACE, "user_id", user.id)
    return _with_session_cookie(JSONResponse(OkOut().model_dump()), session)


async def _account_page(
    request: Request, session: RedisSessionStore, page: str
) -> Response | AccountPageOut:
    user_id = (await session.get(AUTH_NAMESPACE)).get("user_id")
    if not user_id:
        return await _redirect_to_login(
            request, session, error=messages.SIGN_IN_REQUIRED
        )
    return AccountPageOut(page=page, user_id=user_id)


@router.get("/change-email", response_model=AccountPageOut)
async def get_change_email(
    request: Request,
    session: Annotated[RedisSessionStore, Depends(get_session)],
):
    return await _account_page(request, session, "change-email")


@router.get("/remove-account", response_model=AccountPageOut)
async def get_remove_account(
    request: Request,
    session: Annotated[RedisSessionStore, Depends(get_session)],
):
    return await _account_page(request, session, "remove-account")
