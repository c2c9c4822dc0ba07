#!/usr/bin/env python3
"""Run the Pesten Web API server."""

import os
from pathlib import Path

import uvicorn


def main():
    """Run the server."""
    # Load .env file if it exists
    env_file = Path(__file__).parent / ".env"
    if env_file.exists():
        from dotenv import load_dotenv
        load_dotenv(env_file)
        print(f"Loaded environment from {env_file}")

    uvicorn.run(
        "web.api:app",
        host=os.environ.get("PESTEN_HOST", "127.0.0.1"),
        port=int(os.environ.get("PESTEN_PORT", "8000")),
        reload=os.environ.get("PESTEN_RELOAD", "").lower() == "true",
        log_level=os.environ.get("PESTEN_LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
