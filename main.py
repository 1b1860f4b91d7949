from fastapi import FastAPI
from dotenv import load_dotenv
import os
import logging
from routers import ai, text
from services.ai_chat_service import DEFAULT_BASE_URL, DEFAULT_MODEL

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def validate_ai_credentials():
    """
    Validate the upstream AI configuration and log its status.

    If AI_API_KEY is missing the chat proxy answers with HTTP 500, but the
    application still starts and the text endpoints keep working.
    """
    if os.getenv("AI_API_KEY"):
        logger.info("=" * 60)
        logger.info("AI chat proxy ENABLED")
        logger.info(f"  Base URL: {os.getenv('AI_BASE_URL', DEFAULT_BASE_URL)}")
        logger.info(f"  Model: {os.getenv('AI_MODEL', DEFAULT_MODEL)}")
        logger.info("=" * 60)
    else:
        logger.warning("=" * 60)
        logger.warning("AI chat proxy DISABLED")
        logger.warning("Missing AI_API_KEY")
        logger.warning("Text cleaning and rendering endpoints remain available")
        logger.warning("=" * 60)


# Call validation at startup
validate_ai_credentials()

app = FastAPI(title="AI Text Reconstruction Service")

# Include routers
app.include_router(ai.router)
app.include_router(text.router)
