import logging
from typing import Any

from briefing_agent.infrastructure.data_models import ModelResponse, ToolRequestBlock


def log_model_response(response: ModelResponse, logger: logging.Logger) -> None:
    logger.info(f"Response from model: {response.model or 'Unknown'}")
    logger.info(f"Stop reason: {response.stop_reason or 'Unknown'}")
    logger.info(f"Usage: {response.usage or 'Unknown'}")


def log_tool_request(request: ToolRequestBlock, logger: logging.Logger) -> None:
    logger.info(f"Model wants to use tool: {request.tool_name}")
    logger.info(f"Tool input parameters: {request.input}")


def log_tool_result(name: str, result: Any, logger: logging.Logger) -> None:
    logger.info(f"Tool result ({name}): {result}")
