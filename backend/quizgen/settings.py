from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	# Chat-completion model used for quiz generation
	openai_model: str = Field(default="gpt-4", validation_alias="OPENAI_MODEL")
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")
	openai_temperature: float = Field(default=0.7, validation_alias="OPENAI_TEMPERATURE")
	openai_max_tokens: int = Field(default=4000, validation_alias="OPENAI_MAX_TOKENS")
	openai_timeout: float = Field(default=30.0, validation_alias="OPENAI_TIMEOUT")

	# Auth configuration; tokens are only decoded to identify the caller for audit events
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_minutes: int = Field(default=120, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Logging
	environment: str = Field(default="development", validation_alias="ENVIRONMENT")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_dir: str | None = Field(default=None, validation_alias="LOG_DIR")

	# Comma separated list, "*" allows any origin
	cors_allow_origins: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def cors_origins(self) -> list[str]:
		return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()] or ["*"]

settings = Settings()
