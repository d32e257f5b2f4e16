import sys

from briefing_agent.app.main import process


def main() -> None:
    """Console entry point for the briefing agent."""
    sys.exit(process())


if __name__ == "__main__":
    main()
