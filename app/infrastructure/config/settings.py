"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    download_lead_repository: str = "in_memory"  # in_memory or postgres
    resource_catalog: str = "csv"  # csv or postgres
    resource_catalog_csv_path: str = ""  # Defaults to data/resources.csv in the project root
    database_url: str = (
        ""  # Required when download_lead_repository=postgres or resource_catalog=postgres
    )
    otp_ttl_seconds: int = 600  # 10 minutes
    email_backend: str = "console"  # console or smtp
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_timeout_seconds: int = 10
    email_from: str = ""  # Defaults to smtp_user
    email_from_name: str = "Himanshu Majithiya & Co."
    firm_name: str = "Himanshu Majithiya & Co."
    rate_limiter: str = "in_memory"  # in_memory, redis or disabled
    redis_url: str = "redis://localhost:6379/0"
    download_request_rate_limit: int = 10
    otp_verify_rate_limit: int = 10
    rate_limit_window_seconds: int = 60
    uploads_path: str = ""  # Files served from <uploads_path>/downloads, else public/downloads
    download_url_prefix: str = "/download/"
    admin_api_key: str = ""  # Admin endpoints are disabled while empty

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
