from decouple import config, Csv

PLACEHOLDER_DATABASE_URLS = (
    "postgresql://placeholder",
    "https://placeholder.supabase.co",
)

class Settings:
    # Database Configuration (hosted Postgres; empty means "not configured")
    DATABASE_URL: str = config("DATABASE_URL", default="")
    SQL_ECHO: bool = config("SQL_ECHO", default=False, cast=bool)

    # CORS
    FRONTEND_ORIGINS: list = config(
        "FRONTEND_ORIGINS",
        default="http://localhost:5173,http://localhost:3000",
        cast=Csv()
    )

    # Environment
    ENVIRONMENT: str = config("ENVIRONMENT", default="development")
    DEBUG: bool = config("DEBUG", default=False, cast=bool)

    # Logging
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")

    @property
    def database_configured(self) -> bool:
        url = (self.DATABASE_URL or "").strip()
        return bool(url) and url not in PLACEHOLDER_DATABASE_URLS

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

settings = Settings()
