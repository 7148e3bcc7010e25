from typing import Literal

from pydantic import BaseModel, Field


class FlashOut(BaseModel):
    type: Literal["error", "success", "info"]
    text: str


class PendingActivationOut(BaseModel):
    status: Literal["pending"] = "pending"
    email: str = Field(..., description="The email waiting for confirmation")
    resend_activation_uri: str = Field(
        ..., description="Link that sends the activation email again"
    )


class LoginPageOut(BaseModel):
    page: Literal["login"] = "login"
    messages: list[FlashOut] = Field(default_factory=list)


class AccountPageOut(BaseModel):
    page: Literal["change-email", "remove-account"]
    user_id: str


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"
