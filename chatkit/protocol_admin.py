"""Request messages of the admin service and their argument checks."""

from __future__ import annotations

from dataclasses import dataclass, field

from chatkit.errors import ArgsError
from chatkit.protocol_chat import Pagination, _check_pagination
from chatkit.tokenverify import UserType

INVITATION_CODE_ALL = 0
INVITATION_CODE_USED = 1
INVITATION_CODE_UNUSED = 2

STATUS_ON_SHELF = 1
STATUS_UN_SHELF = 2


def _has_duplicate(items: list[str]) -> bool:
    return len(set(items)) != len(items)


@dataclass
class LoginReq:
    account: str = ""
    password: str = field(default="", repr=False)
    version: str = ""

    def check(self) -> None:
        if self.account == "":
            raise ArgsError("account is empty")
        if self.password == "":
            raise ArgsError("password is empty")


@dataclass
class ChangePasswordReq:
    password: str = field(default="", repr=False)

    def check(self) -> None:
        if self.password == "":
            raise ArgsError("password is empty")


@dataclass
class AddDefaultFriendReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")
        if _has_duplicate(self.user_ids):
            raise ArgsError("userIDs has duplicate")


@dataclass
class DelDefaultFriendReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class SearchDefaultFriendReq:
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class AddDefaultGroupReq:
    group_ids: list[str] | None = None

    def check(self) -> None:
        if self.group_ids is None:
            raise ArgsError("GroupIDs is empty")
        if _has_duplicate(self.group_ids):
            raise ArgsError("GroupIDs has duplicate")


@dataclass
class DelDefaultGroupReq:
    group_ids: list[str] | None = None

    def check(self) -> None:
        if self.group_ids is None:
            raise ArgsError("GroupIDs is empty")


@dataclass
class SearchDefaultGroupReq:
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class AddInvitationCodeReq:
    codes: list[str] | None = None

    def check(self) -> None:
        if self.codes is None:
            raise ArgsError("codes is invalid")


@dataclass
class GenInvitationCodeReq:
    length: int = 0
    num: int = 0
    chars: str = ""

    def check(self) -> None:
        if self.length < 1:
            raise ArgsError("len is invalid")
        if self.num < 1:
            raise ArgsError("num is invalid")
        if self.chars == "":
            raise ArgsError("chars is in invalid")


@dataclass
class FindInvitationCodeReq:
    codes: list[str] | None = None

    def check(self) -> None:
        if self.codes is None:
            raise ArgsError("codes is empty")


@dataclass
class UseInvitationCodeReq:
    code: str = ""
    user_id: str = ""

    def check(self) -> None:
        if self.code == "":
            raise ArgsError("code is empty")
        if self.user_id == "":
            raise ArgsError("userID is empty")


@dataclass
class DelInvitationCodeReq:
    codes: list[str] | None = None

    def check(self) -> None:
        if self.codes is None:
            raise ArgsError("codes is empty")


@dataclass
class SearchInvitationCodeReq:
    status: int = INVITATION_CODE_ALL
    user_ids: list[str] = field(default_factory=list)
    codes: list[str] = field(default_factory=list)
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        if self.status not in (INVITATION_CODE_UNUSED, INVITATION_CODE_USED, INVITATION_CODE_ALL):
            raise ArgsError("state invalid")
        _check_pagination(self.pagination)


@dataclass
class SearchUserIPLimitLoginReq:
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class AddUserIPLimitLoginReq:
    limits: list | None = None

    def check(self) -> None:
        if self.limits is None:
            raise ArgsError("limits is empty")


@dataclass
class DelUserIPLimitLoginReq:
    limits: list | None = None

    def check(self) -> None:
        if self.limits is None:
            raise ArgsError("limits is empty")


@dataclass
class SearchIPForbiddenReq:
    keyword: str = ""
    status: int = 0
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class AddIPForbiddenReq:
    forbiddens: list | None = None

    def check(self) -> None:
        if self.forbiddens is None:
            raise ArgsError("forbiddens is empty")


@dataclass
class DelIPForbiddenReq:
    ips: list[str] | None = None

    def check(self) -> None:
        if self.ips is None:
            raise ArgsError("ips is empty")


@dataclass
class CheckRegisterForbiddenReq:
    ip: str = ""

    def check(self) -> None:
        if self.ip == "":
            raise ArgsError("ip is empty")


@dataclass
class CheckLoginForbiddenReq:
    ip: str = ""
    user_id: str = ""

    def check(self) -> None:
        if self.ip == "" and self.user_id == "":
            raise ArgsError("ip and userID is empty")


@dataclass
class CancellationUserReq:
    user_id: str = ""
    reason: str = ""

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")


@dataclass
class BlockUserReq:
    user_id: str = ""
    reason: str = ""

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")


@dataclass
class UnblockUserReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class SearchBlockUserReq:
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class FindUserBlockInfoReq:
    user_ids: list[str] | None = None

    def check(self) -> None:
        if self.user_ids is None:
            raise ArgsError("userIDs is empty")


@dataclass
class CreateTokenReq:
    user_id: str = ""
    user_type: int = 0

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")
        if not UserType.NORMAL <= self.user_type <= UserType.ADMIN:
            raise ArgsError("userType is invalid")


@dataclass
class ParseTokenReq:
    token: str = ""

    def check(self) -> None:
        if self.token == "":
            raise ArgsError("token is empty")


@dataclass
class AddAppletReq:
    id: str = ""
    name: str = ""
    app_id: str = ""
    icon: str = ""
    url: str = ""
    md5: str = ""
    size: int = 0
    version: str = ""
    priority: int = 0
    status: int = 0
    create_time: int = 0

    def check(self) -> None:
        if self.name == "":
            raise ArgsError("name is empty")
        if self.app_id == "":
            raise ArgsError("appID is empty")
        if self.icon == "":
            raise ArgsError("icon is empty")
        if self.url == "":
            raise ArgsError("url is empty")
        if self.md5 == "":
            raise ArgsError("md5 is empty")
        if self.size <= 0:
            raise ArgsError("size is invalid")
        if self.version == "":
            raise ArgsError("version is empty")
        if not STATUS_ON_SHELF <= self.status <= STATUS_UN_SHELF:
            raise ArgsError("status is invalid")


@dataclass
class DelAppletReq:
    applet_ids: list[str] | None = None

    def check(self) -> None:
        if self.applet_ids is None:
            raise ArgsError("appletIds is empty")


@dataclass
class UpdateAppletReq:
    id: str = ""
    name: str | None = None
    app_id: str | None = None
    icon: str | None = None
    url: str | None = None
    md5: str | None = None
    size: int | None = None
    version: str | None = None
    priority: int | None = None
    status: int | None = None

    def check(self) -> None:
        if self.id == "":
            raise ArgsError("id is empty")


@dataclass
class SearchAppletReq:
    keyword: str = ""
    pagination: Pagination | None = None

    def check(self) -> None:
        _check_pagination(self.pagination)


@dataclass
class SetClientConfigReq:
    config: dict[str, str] | None = None

    def check(self) -> None:
        if self.config is None:
            raise ArgsError("config is empty")


@dataclass
class ChangeAdminPasswordReq:
    user_id: str = ""
    current_password: str = field(default="", repr=False)
    new_password: str = field(default="", repr=False)

    def check(self) -> None:
        if self.user_id == "":
            raise ArgsError("userID is empty")
        if self.current_password == "":
            raise ArgsError("currentPassword is empty")
        if self.new_password == "":
            raise ArgsError("newPassword is empty")
        if self.current_password == self.new_password:
            raise ArgsError("currentPassword is equal to newPassword")


@dataclass
class AddAdminAccountReq:
    account: str = ""
    password: str = field(default="", repr=False)
    face_url: str = ""
    nickname: str = ""

    def check(self) -> None:
        if self.account == "":
            raise ArgsError("account is empty")
        if self.password == "":
            raise ArgsError("password is empty")


@dataclass
class DelAdminAccountReq:
    user_ids: list[str] = field(default_factory=list)

    def check(self) -> None:
        if not self.user_ids:
            raise ArgsError("userIDs is empty")


@dataclass
class SearchAdminAccountReq:
    pagination: Pagination | None = field(default_factory=Pagination)

    def check(self) -> None:
        if self.pagination is None:
            raise ArgsError("pagination is empty")
        if self.pagination.show_number == 0:
            raise ArgsError("showNumber is empty")
        if self.pagination.page_number == 0:
            raise ArgsError("pageNumber is empty")


@dataclass
class GetClientConfigResp:
    config: dict[str, str] | None = None

    def api_format(self) -> None:
        """Replace a missing config with an empty mapping."""
        if self.config is None:
            self.config = {}