from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # YAML file holding organization / secret / port / notification rules
    config_path: str = "config.yml"

    # Bearer token for /api/config; the API answers 500 while it is unset
    config_token: SecretStr | None = None

    host: str = "0.0.0.0"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="GITNOTIFY_", env_file=".env", extra="ignore"
    )

    @property
    def config_token_value(self) -> str | None:
        if self.config_token is None:
            return None
        return self.config_token.get_secret_value() or None


settings = Settings()
