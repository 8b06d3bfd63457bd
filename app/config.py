import os
from dataclasses import dataclass
from dotenv import load_dotenv

PRODUCTION = "production"
STAGING = "staging"
DEVELOPMENT = "development"

_ENV_ALIASES = {
    "prod": PRODUCTION,
    "production": PRODUCTION,
    "stag": STAGING,
    "staging": STAGING,
    "dev": DEVELOPMENT,
    "development": DEVELOPMENT,
}

REPOSITORY_MONGODB = "mongodb"
REPOSITORY_INMEMORY = "inmemory"


def resolve_environment(value: str | None) -> str:
    """Normalise an environment name; unknown values fall back to development."""
    return _ENV_ALIASES.get((value or DEVELOPMENT).strip().lower(), DEVELOPMENT)


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once at startup and passed to the app."""

    environment: str = DEVELOPMENT
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "todo"
    mongodb_timeout_ms: int = 5000
    user_repository: str = REPOSITORY_MONGODB
    region: str = "us-east-1"
    cognito_client_id: str = ""
    cognito_user_pool_id: str = ""
    log_level: str = ""

    def __post_init__(self):
        object.__setattr__(self, "environment", resolve_environment(self.environment))
        repo = self.user_repository.lower()
        if repo not in (REPOSITORY_MONGODB, REPOSITORY_INMEMORY):
            raise ValueError(
                f"Invalid USER_REPOSITORY value: {self.user_repository}. "
                f"Expected '{REPOSITORY_INMEMORY}' or '{REPOSITORY_MONGODB}'"
            )
        object.__setattr__(self, "user_repository", repo)
        if not self.log_level:
            object.__setattr__(self, "log_level", self._default_log_level())

    def _default_log_level(self) -> str:
        if self.is_prod:
            return "WARNING"
        if self.is_stag:
            return "INFO"
        return "DEBUG"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV") or DEVELOPMENT,
            mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
            mongodb_database=os.getenv("MONGODB_DATABASE", "todo"),
            mongodb_timeout_ms=int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),
            user_repository=os.getenv("USER_REPOSITORY", REPOSITORY_MONGODB),
            region=os.getenv("AWS_REGION", "us-east-1"),
            cognito_client_id=os.getenv("COGNITO_CLIENT_ID", ""),
            cognito_user_pool_id=os.getenv("COGNITO_USER_POOL_ID", ""),
            log_level=os.getenv("LOG_LEVEL", ""),
        )

    @property
    def is_prod(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def is_stag(self) -> bool:
        return self.environment == STAGING

    @property
    def is_dev(self) -> bool:
        return self.environment == DEVELOPMENT

    @property
    def cognito_issuer(self) -> str:
        return f"https://cognito-idp.{self.region}.amazonaws.com/{self.cognito_user_pool_id}"

    @property
    def cognito_jwks_url(self) -> str:
        return f"{self.cognito_issuer}/.well-known/jwks.json"
