"""Sending verification codes by e-mail."""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage

_BODY = (
    "Your verification code is: {code}. "
    "This code is valid for 5 minutes and should not be shared with others"
)


@dataclass
class Mail:
    """Sends verification codes through an SMTP server."""

    smtp_addr: str
    smtp_port: int
    sender_mail: str
    sender_authorization_code: str = field(repr=False)
    title: str
    timeout: float = 10.0

    def name(self) -> str:
        return "mail"

    def build_message(self, mail: str, verify_code: str) -> EmailMessage:
        """Return the message that carries the verification code to mail."""
        msg = EmailMessage()
        msg["From"] = self.sender_mail
        msg["To"] = mail
        msg["Subject"] = self.title
        msg.set_content(_BODY.format(code=verify_code), subtype="html")
        return msg

    def send_mail(self, mail: str, verify_code: str) -> None:
        """Send the verification code to mail; SMTP and socket errors propagate."""
        msg = self.build_message(mail, verify_code)
        use_ssl = self.smtp_port == 465
        if use_ssl:
            server = smtplib.SMTP_SSL(
                self.smtp_addr,
                self.smtp_port,
                timeout=self.timeout,
                context=ssl.create_default_context(),
            )
        else:
            server = smtplib.SMTP(self.smtp_addr, self.smtp_port, timeout=self.timeout)
        with server:
            server.ehlo()
            if not use_ssl and server.has_extn("starttls"):
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            if self.sender_mail and self.sender_authorization_code and server.has_extn("auth"):
                server.login(self.sender_mail, self.sender_authorization_code)
            server.send_message(msg)