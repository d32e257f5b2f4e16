import logging
import signal
from types import FrameType

from briefing_agent.app.config import USER_MESSAGE, AgentSettings, get_settings
from briefing_agent.services.conversation_service import (
    ConversationContext,
    ConversationDriver,
)
from briefing_agent.services.llm_service import ModelClient, UpstreamError
from briefing_agent.services.tool_router_service import ToolRouter
from briefing_mcp.fast_api_server.server import ToolServer, create_app
from briefing_shared.platform_manager import create_logger
from briefing_shared.tool_registry import ToolRegistry
from briefing_shared.tool_schemas import build_default_registry

logger = create_logger(logger_name="briefing-agent", log_level="INFO")


def build_driver(settings: AgentSettings, registry: ToolRegistry) -> ConversationDriver:
    """Wire the model client and tool router around one shared registry."""
    model = ModelClient(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_tokens=settings.anthropic_max_tokens,
    )
    router = ToolRouter(registry, base_url=settings.mcp_base_url)
    return ConversationDriver(model=model, router=router, registry=registry)


def run_conversation(driver: ConversationDriver, user_message: str) -> ConversationContext:
    """
    Seed a new transcript with the user message and drive it to completion.

    Raises:
        UpstreamError: If the model service fails.
    """
    logger.info("Starting conversation...")
    context = ConversationContext.start(user_message)
    return driver.run(context)


def setup_shutdown_handler(server: ToolServer) -> None:
    """Close the tool server cleanly on Ctrl-C."""

    def _handle_sigint(signum: int, frame: FrameType | None) -> None:
        logger.info("Shutting down server...")
        server.stop()
        logger.info("Server closed")
        raise SystemExit(0)

    signal.signal(signal.SIGINT, _handle_sigint)


def process(user_message: str = USER_MESSAGE) -> int:
    """
    Run one briefing conversation end to end.

    Returns:
        int: Process exit status; 0 on success, 1 on any fatal error.
    """
    try:
        settings = get_settings()
    except ValueError as e:
        logger.error(f"Error: {e}")
        return 1

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    registry = build_default_registry()

    server = ToolServer(create_app(registry), port=settings.mcp_server_port)
    try:
        server.start()
    except RuntimeError as e:
        logger.error(f"Error: {e}")
        return 1
    logger.info(f"Tool server running on port {settings.mcp_server_port}")
    setup_shutdown_handler(server)

    driver = build_driver(settings, registry)
    try:
        context = run_conversation(driver, user_message)
    except UpstreamError as e:
        logger.error(f"Error in conversation: {e}")
        if e.body is not None:
            logger.error(f"Model service response: {e.body}")
        return 1
    finally:
        server.stop()

    for text in context.assistant_texts()[-1:]:
        logger.info(f"Final answer: {text}")
    return 0
