"""Request messages of the chat service and their argument checks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from chatkit.errors import ArgsError

IOS_PLATFORM_ID = 1
ADMIN_PLATFORM_ID = 10

VERIFICATION_CODE_FOR_REGISTER = 1
VERIFICATION_CODE_FOR_RESET = 2
VERIFICATION_CODE_FOR_LOGIN = 3

FIND_ALL_USER = 0
FIND_NORMAL_USER = 1

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_UINT64_MAX = (1 << 64) - 1


@dataclass
class Pagination:
    """Page position of a search request."""

    page_number: int = 0
    show_number: int = 0


def _check_pagination(pagination: Pagination | None, missing: str = "pagination is empty") -> None:
    if pagination is None:
        raise ArgsError(missing)
    if pagination.page_number < 1:
        raise ArgsError("pageNumber is invalid")
    if pagination.show_number < 1:
        raise ArgsError("showNumber is invalid")


def _is_uint64(text: str) -> bool:
    return text.isascii() and text.isdigit() and int(text) <= _UINT64_MAX


def email_check(email: str) -> None:
    """Raise ArgsError unless email looks like an e-mail address."""
    if not _EMAIL_RE.fullmatch(email):
        raise ArgsError("Email is invalid")


def area_code_check(area_code: str) -> None:
    """Accept any area code."""
    return None


def phone_number_check(phone_number: str) -> None:
    """Raise ArgsError unless phone_number is a non-empty unsigned decimal number."""
    if phone_number == "":
        raise ArgsError("phoneNumber is empty")
    if not _is_uint64(phone_number):
        raise ArgsError("phoneNumber is invalid")


def _check_contact(email: str, area_code: str, phone_number: str) -> None:
    if email == "":
        if area_code == "":
            raise ArgsError("AreaCode is empty")
        area_code_check(area_code)
        if phone_number == "":
            raise ArgsError("PhoneNumber is empty")
        phone_number_check(phone_number)
    else:
        email_check(email)


def _check_platform(platform: int) -> None:
    if not IOS_PLATFORM_ID <= platform <= ADMIN_PLATFORM_ID:
        raise ArgsError("platform is invalid")


@dataclass
class UpdateUserInfoReq:
    user_id: str = ""
    account: str | None = None
    area_code: str | None = None
    phone_number: str | None = None
    email: str | None = None
    nickname: str | None = None
    face_url: str | None = None
    gender: int | None = None
    level: int | None = None
    birth: int | None = None
    allow_add_friend: int | None = None
    allow_beep: int | None = None
    allow_vibration: int | None = None
    global_recv_msg_opt: int | None = None
    register_type: int | None = None

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")
        if self.email is not None and self.email != "":
            email_check(self.email)


@dataclass
class FindUserPublicInfoReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class SearchUserPublicInfoReq:
    keyword: str = ""
    pagination: Pagination | None = None
    genders: int = 0

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class FindUserFullInfoReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class SendVerifyCodeReq:
    used_for: int = 0
    ip: str = ""
    invitation_code: str = ""
    device_id: str = ""
    platform: int = 0
    area_code: str = ""
    phone_number: str = ""
    email: str = ""

    def check(self) -> None:
        if not VERIFICATION_CODE_FOR_REGISTER <= self.used_for <= VERIFICATION_CODE_FOR_LOGIN:
            raise ArgsError("usedFor flied is empty")
        _check_contact(self.email, self.area_code, self.phone_number)


@dataclass
class VerifyCodeReq:
    area_code: str = ""
    phone_number: str = ""
    verify_code: str = ""
    email: str = ""

    def check(self) -> None:
        _check_contact(self.email, self.area_code, self.phone_number)
        if self.verify_code == "":
            raise ArgsError("VerifyCode is empty")


@dataclass
class RegisterUserInfo:
    user_id: str = ""
    nickname: str = ""
    face_url: str = ""
    birth: int = 0
    gender: int = 0
    area_code: str = ""
    phone_number: str = ""
    email: str = ""
    account: str = ""
    password: str = field(default="", repr=False)


@dataclass
class RegisterUserReq:
    invitation_code: str = ""
    verify_code: str = ""
    ip: str = ""
    device_id: str = ""
    platform: int = 0
    auto_login: bool = False
    user: RegisterUserInfo | None = None

    def check(self) -> None:
        if self.user is None:
            raise ArgsError("user is empty")
        if self.user.nickname == "":
            raise ArgsError("Nickname is nil")
        _check_platform(self.platform)
        _check_contact(self.user.email, self.user.area_code, self.user.phone_number)


@dataclass
class LoginReq:
    area_code: str = ""
    phone_number: str = ""
    verify_code: str = ""
    password: str = field(default="", repr=False)
    platform: int = 0
    device_id: str = ""
    email: str = ""
    account: str = ""

    def check(self) -> None:
        _check_platform(self.platform)
        _check_contact(self.email, self.area_code, self.phone_number)


@dataclass
class ResetPasswordReq:
    area_code: str = ""
    phone_number: str = ""
    verify_code: str = ""
    password: str = field(default="", repr=False)
    email: str = ""

    def check(self) -> None:
        if self.password == "":
            raise ArgsError("password is empty")
        _check_contact(self.email, self.area_code, self.phone_number)
        if self.verify_code == "":
            raise ArgsError("VerifyCode is empty")


@dataclass
class ChangePasswordReq:
    user_id: str = ""
    current_password: str = field(default="", repr=False)
    new_password: str = field(default="", repr=False)

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")
        if self.new_password == "":
            raise ArgsError("newPassword is empty")


@dataclass
class FindUserAccountReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class FindAccountUserReq:
    accounts: list[str] | None = None

    def check(self) -> None:
        if self.accounts is None:
            raise ArgsError("Accounts is empty")


@dataclass
class SearchUserFullInfoReq:
    keyword: str = ""
    pagination: Pagination | None = None
    genders: int = 0
    normal: int = 0

    def check(self) -> None:
        _check_pagination(self.pagination)
        if not FIND_ALL_USER <= self.normal <= FIND_NORMAL_USER:
            raise ArgsError("normal flied is invalid")


@dataclass
class GetTokenForVideoMeetingReq:
    room: str = ""
    identity: str = ""

    def check(self) -> None:
        """Accept the request; room and identity are not enforced."""
        return None


@dataclass
class SearchUserInfoReq:
    keyword: str = ""
    pagination: Pagination | None = None
    genders: list[int] = field(default_factory=list)

    def check(self) -> None:
        _check_pagination(self.pagination, "Pagination is nil")


@dataclass
class AddUserAccountReq:
    ip: str = ""
    device_id: str = ""
    platform: int = 0
    user: RegisterUserInfo | None = None

    def check(self) -> None:
        """Validate the request, prefixing the area code with "+" when it lacks one."""
        user = self.user
        if user is None:
            raise ArgsError("user is empty")
        if user.email == "":
            if user.area_code == "" or user.phone_number == "":
                raise ArgsError("area code or phone number is empty")
            if not user.area_code.startswith("+"):
                user.area_code = "+" + user.area_code
            if not _is_uint64(user.area_code[1:]):
                raise ArgsError("area code must be number")
            if not _is_uint64(user.phone_number):
                raise ArgsError("phone number must be number")
        else:
            try:
                email_check(user.email)
            except ArgsError:
                raise ArgsError("email must be right") from None