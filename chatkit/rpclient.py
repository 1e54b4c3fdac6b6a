"""Convenience wrappers over the admin and chat service clients."""

from __future__ import annotations

from typing import Any, Protocol

from chatkit import mctx
from chatkit.errors import RecordNotFoundError
from chatkit.mctx import Context
from chatkit.protocol_admin import (
    CheckLoginForbiddenReq,
    CheckRegisterForbiddenReq,
    CreateTokenReq,
    UseInvitationCodeReq,
)
from chatkit.protocol_chat import FindUserFullInfoReq, FindUserPublicInfoReq, UpdateUserInfoReq


class AdminService(Protocol):
    def get_client_config(self, ctx: Context) -> Any: ...
    def check_register_forbidden(self, ctx: Context, req: CheckRegisterForbiddenReq) -> Any: ...
    def check_login_forbidden(self, ctx: Context, req: CheckLoginForbiddenReq) -> Any: ...
    def use_invitation_code(self, ctx: Context, req: UseInvitationCodeReq) -> Any: ...
    def create_token(self, ctx: Context, req: CreateTokenReq) -> Any: ...
    def find_default_friend(self, ctx: Context) -> Any: ...
    def find_default_group(self, ctx: Context) -> Any: ...


class ChatService(Protocol):
    def find_user_public_info(self, ctx: Context, req: FindUserPublicInfoReq) -> Any: ...
    def find_user_full_info(self, ctx: Context, req: FindUserFullInfoReq) -> Any: ...
    def update_user_info(self, ctx: Context, req: UpdateUserInfoReq) -> Any: ...


class AdminClient:
    """Calls the admin service; service errors propagate unchanged."""

    def __init__(self, client: AdminService):
        self._client = client

    def get_config(self, ctx: Context) -> dict[str, str]:
        conf = self._client.get_client_config(ctx)
        return conf.config if conf.config is not None else {}

    def check_register(self, ctx: Context, ip: str) -> None:
        self._client.check_register_forbidden(ctx, CheckRegisterForbiddenReq(ip=ip))

    def check_login(self, ctx: Context, user_id: str, ip: str) -> None:
        self._client.check_login_forbidden(ctx, CheckLoginForbiddenReq(ip=ip, user_id=user_id))

    def use_invitation_code(self, ctx: Context, user_id: str, invitation_code: str) -> None:
        self._client.use_invitation_code(ctx, UseInvitationCodeReq(code=invitation_code, user_id=user_id))

    def check_nil_or_admin(self, ctx: Context) -> bool:
        """Return False without an operator, True for an admin; raise otherwise."""
        if not mctx.have_op_user(ctx):
            return False
        mctx.check_admin(ctx)
        return True

    def create_token(self, ctx: Context, user_id: str, user_type: int) -> Any:
        return self._client.create_token(ctx, CreateTokenReq(user_id=user_id, user_type=user_type))

    def get_default_friend_user_id(self, ctx: Context) -> list[str]:
        return self._client.find_default_friend(ctx).user_ids

    def get_default_group_id(self, ctx: Context) -> list[str]:
        return self._client.find_default_group(ctx).group_ids


class ChatClient:
    """Calls the chat service; service errors propagate unchanged."""

    def __init__(self, client: ChatService):
        self._client = client

    def find_user_public_info(self, ctx: Context, user_ids: list[str]) -> list:
        if not user_ids:
            return []
        return self._client.find_user_public_info(ctx, FindUserPublicInfoReq(user_ids=list(user_ids))).users

    def map_user_public_info(self, ctx: Context, user_ids: list[str]) -> dict[str, Any]:
        return {user.user_id: user for user in self.find_user_public_info(ctx, user_ids)}

    def find_user_full_info(self, ctx: Context, user_ids: list[str]) -> list:
        if not user_ids:
            return []
        return self._client.find_user_full_info(ctx, FindUserFullInfoReq(user_ids=list(user_ids))).users

    def map_user_full_info(self, ctx: Context, user_ids: list[str]) -> dict[str, Any]:
        return {user.user_id: user for user in self.find_user_full_info(ctx, user_ids)}

    def get_user_full_info(self, ctx: Context, user_id: str) -> Any:
        users = self.find_user_full_info(ctx, [user_id])
        if not users:
            raise RecordNotFoundError("user id not found")
        return users[0]

    def get_user_public_info(self, ctx: Context, user_id: str) -> Any:
        users = self.find_user_public_info(ctx, [user_id])
        if not users:
            raise RecordNotFoundError(f"user id not found userID={user_id}")
        return users[0]

    def update_user(self, ctx: Context, req: UpdateUserInfoReq) -> None:
        self._client.update_user_info(ctx, req)