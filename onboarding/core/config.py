from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendor Onboarding API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Screens the root redirector sends a principal to
    admin_path: str = "/admin"
    dashboard_path: str = "/dashboard"
    login_path: str = "/login"

    # Database (SQLite for local dev, any async driver in deployment)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./onboarding_dev.db",
        alias="DATABASE_URL",
    )

    # Tokens are issued by the external identity provider; we only verify them
    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_audience: str | None = Field(default="authenticated", alias="JWT_AUDIENCE")

    # Object storage (one sub-directory per bucket)
    storage_root: str = Field(default="./storage", alias="STORAGE_ROOT")
    storage_max_object_mb: int = Field(default=5, alias="STORAGE_MAX_OBJECT_MB")
    max_photo_size_mb: int = Field(default=5, alias="MAX_PHOTO_SIZE_MB")

    # Role assumed for principals without a user_roles row
    default_role: str = Field(default="salesperson", alias="DEFAULT_ROLE")

    # When true, approve/reject only apply to pending vendors
    strict_status_transitions: bool = Field(
        default=False, alias="STRICT_STATUS_TRANSITIONS",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_photo_size_bytes(self) -> int:
        return self.max_photo_size_mb * 1024 * 1024

    @property
    def storage_max_object_bytes(self) -> int:
        return self.storage_max_object_mb * 1024 * 1024

settings = Settings()
