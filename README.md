# chatkit

Building blocks for the backend of a chat service: signed session tokens,
caller identity checks, validation of admin and chat requests, verification
e-mails over SMTP, import of users from spreadsheet workbooks, JSON calls to
an IM server's HTTP API, room-join tokens for video meetings, and a WSGI
middleware that logs request and response bodies.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `chatkit.errors` | `CodeError` (numeric `code`, `message`, `detail`, `with_detail()`) and its subclasses `ArgsError`, `NoPermissionError`, `RecordNotFoundError`, `TokenExpiredError`, `TokenMalformedError`, `TokenNotValidYetError`, `TokenUnknownError` |
| `chatkit.tokenverify` | `Token(expires, secret)` creates and verifies HS256 tokens for `UserType.NORMAL` and `UserType.ADMIN` holders |
| `chatkit.mctx` | `Context`, an immutable key/value chain, with `check`, `check_admin`, `check_user`, `check_admin_or_user`, `check_admin_or`, `get_op_user_id`, `get_user_type`, `with_op_user_id`, `with_admin_user`, `with_api_token`, `add_user_type` |
| `chatkit.protocol_chat` | Chat request dataclasses with `check()`; `Pagination`, `email_check`, `area_code_check`, `phone_number_check` |
| `chatkit.protocol_admin` | Admin request dataclasses with `check()`; `GetClientConfigResp.api_format()` |
| `chatkit.mail` | `Mail` builds a verification-code message (`build_message`) and sends it over SMTP (`send_mail`) |
| `chatkit.xlsx` | `open_workbook`, `Workbook`, `parse_sheet`, `parse_all`, `column`, `Kind`, `string_to_value`, `zero_value`, `num_to_az`, `get_axis`, `get_sheet_name`, and the `User` import model |
| `chatkit.imapi` | `ApiCaller` posts JSON to an IM server API path and returns the `data` of its reply |
| `chatkit.rpclient` | `AdminClient` and `ChatClient`, wrappers over admin and chat service objects you supply |
| `chatkit.rtc` | `LiveKit` issues room-join tokens and reports its server URL |
| `chatkit.discovery` | `ResolverDirect`, `get_endpoints`, `subset`, `get_env`, `get_zk_addr_from_env` |
| `chatkit.mw` | `RequestLogMiddleware`, a WSGI middleware that logs request and response bodies at debug level |
| `chatkit.version` | `get()` returns an `Info`; `get_single_version()`; `Output` and `ServerVersion` for a combined report |
| `chatkit.util` | `out_dir`, `exit_with_error`, `sigterm_exit` |

## Examples

Issue and verify a token:

```python
from datetime import timedelta

from chatkit.tokenverify import Token, UserType

tokens = Token(expires=timedelta(hours=1), secret="secret")
signed = tokens.create_token("user-1", UserType.NORMAL)
user_id, user_type = tokens.get_token(signed)   # ("user-1", UserType.NORMAL)
```

An expired token raises `TokenExpiredError`, a token that cannot be decoded
raises `TokenMalformedError`, and a bad signature raises `TokenUnknownError`.

Validate a request; an invalid one raises `ArgsError`:

```python
from chatkit.errors import ArgsError
from chatkit.protocol_chat import LoginReq

try:
    LoginReq(platform=1, email="alice@example.com").check()
except ArgsError as exc:
    print(exc)
```

Check who is calling:

```python
from chatkit import mctx

ctx = mctx.with_admin_user(mctx.Context(), "admin-1")
admin_id = mctx.check_admin(ctx)   # "admin-1"
mctx.check_user(ctx)               # raises NoPermissionError("not user")
```

Read users from a workbook whose sheet is named `user`, with column names
such as `user_id`, `nickname` and `email` in the first row:

```python
from chatkit.xlsx import User, parse_all

with open("users.xlsx", "rb") as stream:
    (users,) = parse_all(stream, User)
```

Any dataclass can be a model: its sheet is named by a `sheet_name()` method or
by the class name, and `field(metadata=column("name"))` maps a field to a
column (`column("-")` skips it).

Column letters for spreadsheet cells:

```python
from chatkit.xlsx import get_axis, num_to_az

num_to_az(27)      # "AA"
get_axis(3, 2)     # "C2"
```

Build a verification e-mail:

```python
from chatkit.mail import Mail

mail = Mail(
    smtp_addr="smtp.example.com",
    smtp_port=465,
    sender_mail="noreply@example.com",
    sender_authorization_code="placeholder",
    title="Verification code",
)
message = mail.build_message("alice@example.com", "5555")
```

`send_mail` uses SMTP over TLS on port 465 and otherwise plain SMTP with
STARTTLS when the server offers it.

## What it does not do

chatkit is a library of parts. It has no command-line program, runs no chat or
RPC server of its own, and keeps no storage. `AdminClient` and `ChatClient`
only wrap service objects that you provide. It does not send SMS messages, and
it does not talk to a ZooKeeper or etcd registry: `chatkit.discovery` only
reads addresses from the environment and splits `direct:///host:port,...`
targets.