import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.policy import SMTP as SMTP_POLICY
from email.utils import formataddr, formatdate, make_msgid
from typing import Any, Dict, Optional
from app.core.config import Settings, settings as default_settings
import logging

logger = logging.getLogger(__name__)


class EmailService:
    """Builds notification emails and hands them to the SMTP server."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_username = settings.smtp_username
        self.smtp_password = settings.smtp_password
        self.use_tls = settings.use_implicit_tls
        self.start_tls = False if self.use_tls else settings.smtp_starttls
        self.validate_certs = settings.smtp_tls_verify
        self.timeout = settings.smtp_timeout
        self.sender_name = settings.mail_sender_name
        self.sender_address = settings.sender_address
        self.recipient = settings.business_email

    @property
    def configured(self) -> bool:
        return bool(self.sender_address and self.recipient)

    def _connection_options(self) -> Dict[str, Any]:
        options = {
            "hostname": self.smtp_host,
            "port": self.smtp_port,
            "use_tls": self.use_tls,
            "start_tls": self.start_tls,
            "validate_certs": self.validate_certs,
            "timeout": self.timeout,
        }
        if self.smtp_username and self.smtp_password:
            options["username"] = self.smtp_username
            options["password"] = self.smtp_password
        return options

    def build_message(self, subject: str, html_body: str, reply_to: str, text_body: Optional[str] = None) -> MIMEMultipart:
        message = MIMEMultipart("alternative", policy=SMTP_POLICY)
        if self.sender_address:
            message["From"] = formataddr((self.sender_name, self.sender_address))
        if self.recipient:
            message["To"] = self.recipient
        message["Reply-To"] = reply_to
        message["Subject"] = subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid()

        if text_body:
            message.attach(MIMEText(text_body, "plain", "utf-8", policy=SMTP_POLICY))
        message.attach(MIMEText(html_body, "html", "utf-8", policy=SMTP_POLICY))
        return message

    async def send_notification(self, message: MIMEMultipart) -> bool:
        """Send one notification; returns False on any delivery failure"""
        if not self.configured:
            logger.warning("Sender or business address not configured, email not sent")
            return False

        try:
            await aiosmtplib.send(message, **self._connection_options())
            return True
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {self.recipient}: {type(e).__name__}: {str(e)}")
            return False

    async def verify_connection(self) -> bool:
        """Connect and log in once, the way a startup health probe would"""
        options = self._connection_options()
        username = options.pop("username", None)
        password = options.pop("password", None)
        try:
            smtp = aiosmtplib.SMTP(**options)
            async with smtp:
                if username and password:
                    await smtp.login(username, password)
            logger.info("SMTP server is ready to send emails")
            return True
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP connection error: {str(e)}")
            return False
