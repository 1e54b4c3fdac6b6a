"""Request context values and the operator checks built on them."""

from __future__ import annotations

import logging
import re
from typing import Any

from chatkit.errors import NoPermissionError
from chatkit.tokenverify import UserType

logger = logging.getLogger(__name__)

OP_USER_ID = "opUserID"
OP_USER_TYPE = "opUserType"
CUSTOM_HEADER = "customHeader"
API_TOKEN = "api-token"
OPERATION_ID = "operationID"

_INT_RE = re.compile(r"[+-]?[0-9]+")


class Context:
    """An immutable chain of key/value pairs."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self, parent: "Context | None" = None, key: Any = None, value: Any = None):
        self._parent = parent
        self._key = key
        self._value = value

    def value(self, key: Any) -> Any:
        """Return the most recent value stored under key, or None."""
        node: Context | None = self
        while node is not None and node._parent is not None:
            if node._key == key:
                return node._value
            node = node._parent
        return None

    def with_value(self, key: Any, value: Any) -> "Context":
        """Return a new context that also holds key -> value."""
        return Context(self, key, value)


def _atoi(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    return int(text)


def have_op_user(ctx: Context) -> bool:
    return ctx.value(OP_USER_ID) is not None


def check(ctx: Context) -> tuple[str, UserType]:
    """Return the operator's user ID and type, or raise NoPermissionError."""
    op_user_id = ctx.value(OP_USER_ID)
    if not isinstance(op_user_id, str):
        raise NoPermissionError("no opUserID")
    if op_user_id == "":
        raise NoPermissionError("opUserID empty")
    types = ctx.value(OP_USER_TYPE)
    if not isinstance(types, list):
        raise NoPermissionError("missing user type")
    if not types:
        raise NoPermissionError("user type empty")
    try:
        user_type = _atoi(types[0])
    except ValueError as exc:
        raise NoPermissionError(f"user type invalid {exc}") from exc
    if user_type not in (UserType.ADMIN, UserType.NORMAL):
        raise NoPermissionError("user type invalid")
    return op_user_id, UserType(user_type)


def check_admin(ctx: Context) -> str:
    user_id, user_type = check(ctx)
    if user_type != UserType.ADMIN:
        raise NoPermissionError("not admin")
    return user_id


def check_user(ctx: Context) -> str:
    user_id, user_type = check(ctx)
    if user_type != UserType.NORMAL:
        raise NoPermissionError("not user")
    return user_id


def check_admin_or_user(ctx: Context) -> tuple[str, UserType]:
    return check(ctx)


def check_admin_or(ctx: Context, *user_ids: str) -> None:
    """Pass if the operator is an admin or one of user_ids."""
    user_id, user_type = check(ctx)
    if user_type == UserType.ADMIN or user_id in user_ids:
        return
    raise NoPermissionError("not admin or not in userIDs")


def get_op_user_id(ctx: Context) -> str:
    value = ctx.value(OP_USER_ID)
    return value if isinstance(value, str) else ""


def get_user_type(ctx: Context) -> int:
    types = ctx.value(OP_USER_TYPE)
    if not isinstance(types, list) or not types:
        raise NoPermissionError("missing user type")
    try:
        return _atoi(types[0])
    except ValueError as exc:
        raise NoPermissionError(f"user type invalid {exc}") from exc


def with_op_user_id(ctx: Context, op_user_id: str, user_type: int) -> Context:
    headers = ctx.value(CUSTOM_HEADER)
    headers = list(headers) if isinstance(headers, list) else []
    ctx = ctx.with_value(OP_USER_ID, op_user_id)
    ctx = ctx.with_value(OP_USER_TYPE, [str(int(user_type))])
    if OP_USER_TYPE not in headers:
        ctx = ctx.with_value(CUSTOM_HEADER, headers + [OP_USER_TYPE])
    return ctx


def with_admin_user(ctx: Context, user_id: str) -> Context:
    return with_op_user_id(ctx, user_id, UserType.ADMIN)


def with_api_token(ctx: Context, token: str) -> Context:
    return ctx.with_value(API_TOKEN, token)


def add_user_type(ctx: Context) -> Context:
    """Mark the operator's user type to be forwarded as a custom header."""
    types = ctx.value(OP_USER_TYPE)
    if isinstance(types, list) and types:
        logger.info("add user type %s", types)
        headers = ctx.value(CUSTOM_HEADER)
        headers = list(headers) if isinstance(headers, list) else []
        ctx = ctx.with_value(CUSTOM_HEADER, headers + [OP_USER_TYPE])
        ctx = ctx.with_value(OP_USER_TYPE, types)
    return ctx