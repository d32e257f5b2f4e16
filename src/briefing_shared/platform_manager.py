import logging
import os
from pathlib import Path

from dotenv import load_dotenv

_ENV_LOADED = False


def create_logger(
    log_level: str = "INFO",
    logger_name: str = "briefing-agent",
    logs_dir: str | Path = "logs",
) -> logging.Logger:
    """
    Create a logger that outputs to console and optionally to a file.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance and its log file.
        logs_dir (str | Path): Directory for log files.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.handlers:  # Prevent handler duplication
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        try:
            logs_path = Path(logs_dir)
            logs_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(logs_path / f"{logger_name}.log")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError:
            # If file logging fails, just continue with console logging
            logger.debug("File logging disabled for %s", logger_name)

    return logger


def load_environment(dotenv_path: str | Path | None = None) -> None:
    """Load a .env file into the process environment once. Existing variables win."""
    global _ENV_LOADED
    if _ENV_LOADED and dotenv_path is None:
        return
    if dotenv_path is not None:
        load_dotenv(dotenv_path=str(dotenv_path))
    elif Path(".env").exists():
        load_dotenv(dotenv_path=".env")
    _ENV_LOADED = True


def get_parameters(param_names: list[str] | str) -> dict[str, str | None]:
    """
    Read parameters from the environment.

    Parameters are stored in the environment in uppercase but returned keyed in
    lowercase. Missing parameters map to None.
    """
    load_environment()

    if isinstance(param_names, str):
        param_names = [param_names]

    result: dict[str, str | None] = {}
    for param_name in param_names:
        result[param_name.lower()] = os.getenv(param_name.upper())
    return result
