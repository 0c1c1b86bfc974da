"""Main entry point for the voice bug agent backend."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from bug_agent.api import create_fastapi_app
from bug_agent.app import Application
from bug_agent.config import Settings
from bug_agent.logging_config import setup_logging
from sim import Sim


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    # Get configuration from environment
    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level)
    api_url = f"http://{settings.api_host}:{settings.api_port}"

    # SIM drives the UI stream through the public webhook
    sim = Sim(api_url=api_url)

    app = create_fastapi_app(Application(settings), sim=sim)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
