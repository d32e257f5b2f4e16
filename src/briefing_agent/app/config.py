from dataclasses import dataclass

from briefing_shared.platform_manager import get_parameters

# Constants that don't change
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-3-opus-20240229"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_MCP_SERVER_PORT = 4000
MODEL_TIMEOUT = 120.0
TOOL_TIMEOUT = 60.0

# Seed message for the briefing conversation
USER_MESSAGE = (
    "Provide a summary of the latest news about artificial intelligence in the form of "
    "a news digest and email it to the users interested in the topic."
)


@dataclass
class AgentSettings:
    """Agent configuration settings loaded from the environment."""

    # Model settings
    anthropic_api_key: str
    anthropic_model: str
    anthropic_max_tokens: int

    # Tool server settings
    mcp_server_port: int
    mcp_base_url: str

    log_level: str = "INFO"


class Config:
    """Singleton configuration manager for the briefing agent."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> AgentSettings:
        """Get agent settings, loading from the environment if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Drop cached settings so the next call reloads them."""
        self._settings = None

    def _load_settings(self) -> AgentSettings:
        params = get_parameters([
            "anthropic_api_key",
            "anthropic_model",
            "anthropic_max_tokens",
            "mcp_server_port",
            "mcp_base_url",
            "log_level",
        ])

        port = _parse_int("mcp_server_port", params["mcp_server_port"], DEFAULT_MCP_SERVER_PORT)
        max_tokens = _parse_int(
            "anthropic_max_tokens", params["anthropic_max_tokens"], DEFAULT_MAX_TOKENS
        )

        settings = AgentSettings(
            anthropic_api_key=params["anthropic_api_key"] or "",
            anthropic_model=params["anthropic_model"] or DEFAULT_MODEL,
            anthropic_max_tokens=max_tokens,
            mcp_server_port=port,
            mcp_base_url=(params["mcp_base_url"] or f"http://localhost:{port}").rstrip("/"),
            log_level=params["log_level"] or "INFO",
        )

        self._validate_settings(settings)
        return settings

    def _validate_settings(self, settings: AgentSettings) -> None:
        """Validate that all required settings have valid values."""
        required_fields = [
            "anthropic_api_key",
            "anthropic_model",
            "mcp_base_url",
        ]
        for field in required_fields:
            if not getattr(settings, field):
                raise ValueError(f"Configuration value is invalid: {field.upper()}")

        if settings.anthropic_max_tokens <= 0:
            raise ValueError("Configuration value is invalid: ANTHROPIC_MAX_TOKENS")

        if not 0 < settings.mcp_server_port < 65536:
            raise ValueError("Configuration value is invalid: MCP_SERVER_PORT")


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Configuration value is invalid: {name.upper()}") from e


# Create singleton instance
config = Config()


def get_settings() -> AgentSettings:
    """Get agent settings from the singleton config."""
    return config.get_settings()
