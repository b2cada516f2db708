import hashlib
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Environment variable names
ENV_SECRET_KEY = "CRYPTO_SECRET_KEY"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"

# Insecure fallback used when no secret is configured. Tokens sealed with it
# can be opened by anyone who knows this value.
DEFAULT_SECRET_KEY = "your-secret-key-here"


def load_secret_key() -> str:
    """
    Reads the sealing secret from the environment.

    Falls back to DEFAULT_SECRET_KEY, logging a warning, when the variable
    is unset or empty.
    """
    secret = os.getenv(ENV_SECRET_KEY)
    if not secret:
        logger.warning(
            f"{ENV_SECRET_KEY} is not set. Falling back to the built-in insecure key; "
            f"share tokens will not be private."
        )
        return DEFAULT_SECRET_KEY
    return secret


def derive_key(secret: str) -> bytes:
    """Stretches an arbitrary secret to a 32-byte key with SHA-256."""
    return hashlib.sha256(secret.encode("utf-8")).digest()


def load_github_token() -> Optional[str]:
    return os.getenv(ENV_GITHUB_TOKEN) or None
