from types import SimpleNamespace

import pytest

from chatkit.errors import NoPermissionError, RecordNotFoundError
from chatkit.mctx import Context, with_admin_user, with_op_user_id
from chatkit.protocol_chat import UpdateUserInfoReq
from chatkit.rpclient import AdminClient, ChatClient
from chatkit.tokenverify import UserType


class FakeAdmin:
    def __init__(self, config=None, user_ids=(), group_ids=()):
        self.config = config
        self.user_ids = list(user_ids)
        self.group_ids = list(group_ids)
        self.calls = []

    def get_client_config(self, ctx):
        return SimpleNamespace(config=self.config)

    def check_register_forbidden(self, ctx, req):
        self.calls.append(("register", req))

    def check_login_forbidden(self, ctx, req):
        self.calls.append(("login", req))

    def use_invitation_code(self, ctx, req):
        self.calls.append(("use", req))

    def create_token(self, ctx, req):
        self.calls.append(("token", req))
        return SimpleNamespace(admin_token="token")

    def find_default_friend(self, ctx):
        return SimpleNamespace(user_ids=self.user_ids)

    def find_default_group(self, ctx):
        return SimpleNamespace(group_ids=self.group_ids)


class FakeChat:
    def __init__(self, users):
        self.users = users
        self.requests = []

    def find_user_public_info(self, ctx, req):
        self.requests.append(req)
        return SimpleNamespace(users=[u for u in self.users if u.user_id in req.user_ids])

    def find_user_full_info(self, ctx, req):
        self.requests.append(req)
        return SimpleNamespace(users=[u for u in self.users if u.user_id in req.user_ids])

    def update_user_info(self, ctx, req):
        self.requests.append(req)


def test_get_config_none_becomes_empty():
    assert AdminClient(FakeAdmin(config=None)).get_config(Context()) == {}


def test_get_config_returns_mapping():
    assert AdminClient(FakeAdmin(config={"a": "b"})).get_config(Context()) == {"a": "b"}


def test_requests_carry_arguments():
    service = FakeAdmin()
    client = AdminClient(service)
    client.check_register(Context(), "10.0.0.1")
    client.check_login(Context(), "u1", "10.0.0.2")
    client.use_invitation_code(Context(), "u2", "code1")
    kinds = [kind for kind, _ in service.calls]
    assert kinds == ["register", "login", "use"]
    assert service.calls[0][1].ip == "10.0.0.1"
    assert (service.calls[1][1].user_id, service.calls[1][1].ip) == ("u1", "10.0.0.2")
    assert (service.calls[2][1].user_id, service.calls[2][1].code) == ("u2", "code1")


def test_create_token_passes_through():
    service = FakeAdmin()
    resp = AdminClient(service).create_token(Context(), "u1", UserType.ADMIN)
    assert resp.admin_token == "token"
    assert service.calls[0][1].user_type == UserType.ADMIN


def test_default_friend_and_group():
    client = AdminClient(FakeAdmin(user_ids=["u1"], group_ids=["g1", "g2"]))
    assert client.get_default_friend_user_id(Context()) == ["u1"]
    assert client.get_default_group_id(Context()) == ["g1", "g2"]


def test_check_nil_or_admin():
    client = AdminClient(FakeAdmin())
    assert client.check_nil_or_admin(Context()) is False
    assert client.check_nil_or_admin(with_admin_user(Context(), "a1")) is True
    with pytest.raises(NoPermissionError):
        client.check_nil_or_admin(with_op_user_id(Context(), "u1", UserType.NORMAL))


def _users():
    return [SimpleNamespace(user_id="u1", nickname="one"), SimpleNamespace(user_id="u2", nickname="two")]


def test_find_empty_ids_skips_service():
    service = FakeChat(_users())
    client = ChatClient(service)
    assert client.find_user_public_info(Context(), []) == []
    assert client.find_user_full_info(Context(), []) == []
    assert service.requests == []


def test_map_user_info_keys_by_user_id():
    client = ChatClient(FakeChat(_users()))
    public = client.map_user_public_info(Context(), ["u1", "u2"])
    full = client.map_user_full_info(Context(), ["u2"])
    assert {k: v.nickname for k, v in public.items()} == {"u1": "one", "u2": "two"}
    assert list(full) == ["u2"]


def test_get_user_info_found_and_missing():
    client = ChatClient(FakeChat(_users()))
    assert client.get_user_full_info(Context(), "u1").nickname == "one"
    assert client.get_user_public_info(Context(), "u2").nickname == "two"
    with pytest.raises(RecordNotFoundError):
        client.get_user_full_info(Context(), "missing")
    with pytest.raises(RecordNotFoundError):
        client.get_user_public_info(Context(), "missing")


def test_update_user_forwards_request():
    service = FakeChat([])
    req = UpdateUserInfoReq(user_id="u1")
    ChatClient(service).update_user(Context(), req)
    assert service.requests == [req]