from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Email transport
    smtp_host: str = "localhost"
    smtp_port: int = 465
    smtp_secure: Optional[bool] = None  # implicit TLS, defaults to port == 465
    smtp_starttls: Optional[bool] = None  # None upgrades only when offered
    smtp_username: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SMTP_USERNAME", "SMTP_USER")
    )
    smtp_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SMTP_PASSWORD", "SMTP_PASS")
    )
    smtp_tls_verify: bool = True
    smtp_timeout: float = 10.0
    smtp_verify_on_startup: bool = True

    # Notification addressing
    mail_from: Optional[str] = None
    mail_sender_name: str = "LWA Website"
    brand_name: str = "LWA Leads Group"
    business_email: Optional[str] = None

    # HTTP surface
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: str = "http://localhost:3000"
    static_dir: str = "public"
    max_body_bytes: int = 10 * 1024
    trust_proxy: bool = False

    # Rate limiting
    form_rate_limit: int = 5
    form_rate_window_seconds: int = 15 * 60
    global_rate_limit: int = 60
    global_rate_window_seconds: int = 60
    redis_url: Optional[str] = None

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"
        frozen = True
        populate_by_name = True

    @property
    def allowed_origin_list(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def use_implicit_tls(self) -> bool:
        if self.smtp_secure is None:
            return self.smtp_port == 465
        return self.smtp_secure

    @property
    def sender_address(self) -> Optional[str]:
        return self.mail_from or self.smtp_username


settings = Settings()
