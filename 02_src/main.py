"""Main entry point for the Lucy chat client engine."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from lucy.api import create_fastapi_app
from lucy.app import Application
from lucy.logging_config import setup_logging


def main():
    """Run the local API."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    application = Application(api_url=os.getenv("LUCY_BACKEND_URL"))
    app = create_fastapi_app(application)

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
