import logging
import opik

logger = logging.getLogger(__name__)


def setup_opik(api_key: str = "", workspace: str = "") -> bool:
    """
    Configure Opik tracing. Returns False when no API key is given.
    """
    if not api_key:
        logger.info("Opik API key not set. Tracing will be disabled or local only.")
        return False

    opik.configure(api_key=api_key, workspace=workspace or None)
    logger.info(f"Opik configured for workspace: {workspace or 'default'}")
    return True
