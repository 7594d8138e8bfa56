import logging
import os

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    Raises ValueError when required environment variables are missing.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    # Links can still be read and toggled without a token; generation will fail
    if not os.environ.get(rules.shortener.token_env):
        logger.warning(
            "%s is not set; share link generation is disabled", rules.shortener.token_env
        )

    logger.info("Configuration validated.")
