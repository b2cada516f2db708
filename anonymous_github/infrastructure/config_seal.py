import base64
import binascii
import logging
from typing import Optional

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from pydantic import ValidationError

from anonymous_github.domain.models import SealedConfig
from anonymous_github.infrastructure import url_safe
from anonymous_github.infrastructure.settings import derive_key, load_secret_key

logger = logging.getLogger(__name__)

AES_NONCE_SIZE = 12
AES_TAG_SIZE = 16


class ConfigSeal:
    """
    Seals a SealedConfig into an opaque URL-safe token and opens it again.

    Tokens are AES-256-GCM encrypted JSON laid out as nonce || tag || ciphertext,
    rendered as unpadded URL-safe base64. The key is derived from a single
    process-wide secret which may be injected; otherwise it is read from the
    environment on first use.
    """

    def __init__(self, secret: Optional[str] = None):
        self._secret = secret
        self._key: Optional[bytes] = None

    @property
    def key(self) -> bytes:
        if self._key is None:
            secret = self._secret if self._secret is not None else load_secret_key()
            self._key = derive_key(secret)
        return self._key

    def seal(self, config: SealedConfig) -> str:
        """
        Serializes and encrypts a configuration.

        Args:
            config (SealedConfig): A validated configuration record.

        Returns:
            str: Token safe to embed as a URL path segment.
        """
        payload = config.model_dump_json(by_alias=True).encode("utf-8")

        cipher = AES.new(self.key, AES.MODE_GCM, nonce=get_random_bytes(AES_NONCE_SIZE))
        ciphertext, tag = cipher.encrypt_and_digest(payload)

        standard_b64 = base64.b64encode(cipher.nonce + tag + ciphertext).decode("ascii")
        return url_safe.encode(standard_b64)

    def unseal(self, token: str) -> Optional[SealedConfig]:
        """
        Decrypts and revalidates a token.

        Returns the configuration only when every stage succeeds and every
        field is valid; any other input yields None. The reason is logged at
        DEBUG level and never surfaced to the caller.
        """
        if not isinstance(token, str) or not token:
            return None

        try:
            raw = base64.b64decode(url_safe.decode(token), validate=True)
            if len(raw) <= AES_NONCE_SIZE + AES_TAG_SIZE:
                logger.debug("Token rejected: payload too short.")
                return None

            nonce = raw[:AES_NONCE_SIZE]
            tag = raw[AES_NONCE_SIZE:AES_NONCE_SIZE + AES_TAG_SIZE]
            ciphertext = raw[AES_NONCE_SIZE + AES_TAG_SIZE:]

            cipher = AES.new(self.key, AES.MODE_GCM, nonce=nonce)
            payload = cipher.decrypt_and_verify(ciphertext, tag)

            return SealedConfig.model_validate_json(payload.decode("utf-8"))
        except ValidationError as e:
            logger.debug(f"Token rejected: invalid configuration ({e.error_count()} errors).")
        except (binascii.Error, ValueError, TypeError) as e:
            logger.debug(f"Token rejected: {type(e).__name__}.")
        return None
