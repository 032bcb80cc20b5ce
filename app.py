"""Chef Engine HTTP service entry point.

Serves the FastAPI application from chef_engine.server.server with uvicorn.

Run with: python app.py
"""

import uvicorn

from chef_engine.utils.config import config
from chef_engine.utils.logger import logger


if __name__ == "__main__":
    logger.info(f"Starting Chef Engine on port {config.PORT}")
    logger.info(f"Text model: {config.TEXT_MODEL} | Image model: {config.IMAGE_MODEL}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run("chef_engine.server.server:app", host="0.0.0.0", port=config.PORT)
