# app/main.py
from fastapi import FastAPI
import uvicorn
from app.core.config import settings
from app.x402.middleware import X402V2Middleware
import logging

# Configure basic logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.AGENT_VERSION,
)

# Rewrite 402 responses to the x402 v2 format for x402scan compatibility
app.add_middleware(X402V2Middleware)

@app.get("/", summary="Health Check", tags=["default"])
def read_root():
    """ Basic health check endpoint. """
    logger.info("Root endpoint '/' accessed.")
    return {
        "status": "ok",
        "name": settings.PROJECT_NAME,
        "version": settings.AGENT_VERSION,
    }


def run():
    """Start the agent server on the configured port."""
    logger.info(f"Starting {settings.PROJECT_NAME} agent on port {settings.PORT}...")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
