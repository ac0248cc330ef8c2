"""
Entry point for the Sufra Recipes API

Runs the FastAPI app with uvicorn. The port comes from the PORT environment
variable when the host sets one, otherwise from settings.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the current directory to Python path to ensure imports work
sys.path.insert(0, str(Path(__file__).parent))

if __name__ == "__main__":
    # PORT may come from a local .env as well as the host environment
    load_dotenv(dotenv_path=Path(__file__).parent / ".env")

    import uvicorn
    from api import app
    from config.settings import settings

    port = int(os.getenv("PORT", settings.port))

    # Single worker: storage and WebSocket clients live in process memory
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        workers=1,
        log_level=settings.log_level.lower()
    )
