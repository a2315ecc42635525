import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("skycast_server.config")

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"
DEFAULT_DATABASE_URL = "sqlite:///./skycast.db"


class Settings:
    """
    Runtime configuration read from the environment (and .env, if present).
    """

    def __init__(
        self,
        database_url: str = DEFAULT_DATABASE_URL,
        weather_api_key: str | None = None,
        route_api_key: str | None = None,
        jwt_secret: str = DEFAULT_JWT_SECRET,
        access_token_expire_minutes: int = 60 * 24 * 30,  # 30 days
        port: int = 3001,
        log_file: str = "server.log",
        cors_origins: list[str] | None = None,
    ):
        self.database_url = database_url
        self.weather_api_key = weather_api_key
        self.route_api_key = route_api_key
        self.jwt_secret = jwt_secret
        self.access_token_expire_minutes = access_token_expire_minutes
        self.port = port
        self.log_file = log_file
        self.cors_origins = cors_origins or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            weather_api_key=os.environ.get("WEATHER_API_KEY") or None,
            route_api_key=os.environ.get("ROUTE_API_KEY") or None,
            jwt_secret=os.environ.get("JWT_SECRET") or DEFAULT_JWT_SECRET,
            access_token_expire_minutes=int(
                os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 30)
            ),
            port=int(os.environ.get("PORT", 3001)),
            log_file=os.environ.get("LOG_FILE", "server.log"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )

    def warn_on_insecure_defaults(self) -> None:
        """Logs a warning for every missing key or development default in use."""
        if not self.weather_api_key:
            logger.warning(
                "WEATHER_API_KEY is not set. Weather routes will fail until you set it in .env"
            )
        if not self.route_api_key:
            logger.warning(
                "ROUTE_API_KEY is not set. Route calculation will fail until you set it in .env"
            )
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning(
                "Using default JWT secret. Replace with a secure value in production."
            )
        if self.database_url == DEFAULT_DATABASE_URL:
            logger.warning(
                f"DATABASE_URL is not set. Falling back to {DEFAULT_DATABASE_URL}"
            )
