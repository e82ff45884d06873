from typing import List, Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ChatBackend = Literal["mock", "ollama", "azure_openai"]

DEFAULT_CHAT_SYSTEM_PROMPT = """You are a helpful customer service assistant for GadgetsInc, a technology company that sells smartphones, laptops, smartwatches, headphones, and tablets.

You can help customers with:
- Product information and recommendations
- Order tracking and shipping information
- Customer support and warranty questions
- Technical support and troubleshooting

Always be polite, helpful, and professional. Use the available functions to provide accurate information.
If you don't have specific information, direct customers to contact support at 1-800-GADGETS."""

DEFAULT_SIMPLE_CHAT_SYSTEM_PROMPT = """You are a helpful customer service assistant for GadgetsInc. Be polite and helpful.
Use the available functions to provide accurate product and support information."""


class Settings(BaseSettings):
    # Allow comma-separated env vars for list fields like ALLOWED_ORIGINS
    model_config = SettingsConfigDict(env_file=".env", env_parse_delimiter=",", extra="ignore")
    PROJECT_NAME: str = "GadgetsInc Chat API"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # NOTE: list fields are "complex" env values (JSON expected). A plain
    # comma-separated string is accepted too and split by the validator below.
    ALLOWED_ORIGINS: List[str] | str = Field(default_factory=lambda: ["*"])

    # Completion backend: exactly one is built at startup
    CHAT_BACKEND: ChatBackend = "mock"
    USE_MOCK_CHAT: bool = Field(
        default=False,
        description="Force the mock backend regardless of CHAT_BACKEND",
    )

    # Ollama (local model runtime)
    OLLAMA_BASE_URL: str = Field(
        default="http://localhost:11434",
        validation_alias=AliasChoices("OLLAMA_BASE_URL", "ConnectionStrings__ollama", "OLLAMA_HOST"),
    )
    OLLAMA_MODEL: str = "llama3.2"

    # Azure OpenAI (hosted cloud chat completion)
    AZURE_OPENAI_API_KEY: Optional[str] = None
    AZURE_OPENAI_ENDPOINT: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OPENAI_ENDPOINT", "ConnectionStrings__openai"),
    )
    AZURE_OPENAI_DEPLOYMENT: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("AZURE_OPENAI_DEPLOYMENT", "AZURE_OPENAI_MODEL"),
    )
    AZURE_OPENAI_API_VERSION: str = "2024-10-21"

    LLM_REQUEST_TIMEOUT: int = 120  # seconds
    LLM_TEMPERATURE: float = Field(default=0.3, ge=0.0, le=2.0)
    LLM_MAX_TOOL_ROUNDS: int = Field(default=5, ge=1, description="Model/tool round trips per completion")

    # Simulated latency of the mock backend
    MOCK_CHUNK_DELAY_MS: int = Field(default=50, ge=0)
    MOCK_RESPONSE_DELAY_MS: int = Field(default=500, ge=0)

    CHAT_SYSTEM_PROMPT: str = DEFAULT_CHAT_SYSTEM_PROMPT
    SIMPLE_CHAT_SYSTEM_PROMPT: str = DEFAULT_SIMPLE_CHAT_SYSTEM_PROMPT

    # Logging
    LOG_LEVEL: Optional[str] = None
    JSON_LOGS: Optional[bool] = None

    @property
    def effective_chat_backend(self) -> ChatBackend:
        """Backend actually built at startup, honouring the USE_MOCK_CHAT switch."""
        return "mock" if self.USE_MOCK_CHAT else self.CHAT_BACKEND

    def model_post_init(self, __context):
        """
        Validate configuration on startup. All errors are reported at once
        so a misconfigured deployment fails before serving any request.
        """
        is_prod = self.ENVIRONMENT.lower() == "production"
        errors = []

        if self.LOG_LEVEL and self.LOG_LEVEL.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL must be a standard logging level, got {self.LOG_LEVEL!r}.")

        # Backend connection settings are checked by build_completion_service

        # In production, DEBUG must be disabled
        if is_prod and self.DEBUG:
            errors.append("DEBUG must be False in production.")

        if errors:
            error_msg = "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ValueError(error_msg)

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


settings = Settings()
