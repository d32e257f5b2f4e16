from dataclasses import dataclass

from briefing_shared.platform_manager import get_parameters

# Constants
NEWS_API_URL = "https://newsapi.org/v2/top-headlines"
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
SUMMARY_MODEL = "claude-3-opus-20240229"
SUMMARY_MAX_TOKENS = 600
USERS_TABLE = "NewsUsers"
EMAIL_SENDER_NAME = "Flash Briefing"
BACKEND_TIMEOUT = 30


@dataclass
class MCPSettings:
    """Tool server settings loaded from the environment.

    Backend credentials are optional at load time; a tool whose credentials are
    missing fails when it is called, not when the server starts.
    """

    # Backend credentials
    news_api_key: str = ""
    anthropic_api_key: str = ""
    supabase_url: str = ""
    supabase_api_key: str = ""
    email_user: str = ""
    email_pass: str = ""

    # SMTP settings
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587


class Config:
    """Singleton configuration manager for the tool server."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> MCPSettings:
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        self._settings = None

    def _load_settings(self) -> MCPSettings:
        secrets = get_parameters([
            "news_api_key",
            "anthropic_api_key",
            "supabase_api_key",
            "email_pass",
        ])
        params = get_parameters([
            "supabase_url",
            "email_user",
            "smtp_host",
            "smtp_port",
        ])

        try:
            smtp_port = int(params["smtp_port"] or 587)
        except ValueError as e:
            raise ValueError("Configuration value is invalid: SMTP_PORT") from e

        settings = MCPSettings(
            news_api_key=secrets["news_api_key"] or "",
            anthropic_api_key=secrets["anthropic_api_key"] or "",
            supabase_url=(params["supabase_url"] or "").rstrip("/"),
            supabase_api_key=secrets["supabase_api_key"] or "",
            email_user=params["email_user"] or "",
            email_pass=secrets["email_pass"] or "",
            smtp_host=params["smtp_host"] or "smtp.gmail.com",
            smtp_port=smtp_port,
        )
        self._validate_settings(settings)
        return settings

    def _validate_settings(self, settings: MCPSettings) -> None:
        if not 0 < settings.smtp_port < 65536:
            raise ValueError("Configuration value is invalid: SMTP_PORT")


# Create singleton instance
config = Config()


def get_settings() -> MCPSettings:
    """Get tool server settings from the singleton config."""
    return config.get_settings()
