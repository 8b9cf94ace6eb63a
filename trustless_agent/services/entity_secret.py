"""
Circle entity secret helpers.

The entity secret is 32 random bytes kept as 64 hex characters. Circle never
receives it in the clear: every mutating API call carries it encrypted with
the entity RSA public key (OAEP, SHA-256), base64 encoded.
"""

import base64
import re
import secrets

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from trustless_agent.core.constants import ENTITY_SECRET_BYTES
from trustless_agent.core.errors import ConfigurationError

_HEX_SECRET = re.compile(rf"[0-9a-fA-F]{{{ENTITY_SECRET_BYTES * 2}}}")


def generate_entity_secret() -> str:
    """Generate a new entity secret (64 hex characters)."""
    return secrets.token_hex(ENTITY_SECRET_BYTES)


def validate_entity_secret(entity_secret: str) -> None:
    """
    Check the entity secret format.

    Raises:
        ConfigurationError: not exactly 64 hex characters
    """
    if not _HEX_SECRET.fullmatch(entity_secret or ""):
        raise ConfigurationError(
            f"CIRCLE_ENTITY_SECRET must be {ENTITY_SECRET_BYTES * 2} hex characters ({ENTITY_SECRET_BYTES} bytes)."
        )


def encrypt_entity_secret(entity_secret: str, public_key_pem: str) -> str:
    """
    Encrypt the entity secret for a Circle request.

    Args:
        entity_secret: 64 hex character secret
        public_key_pem: Entity public key in PEM format

    Returns:
        Base64 ciphertext; a new value on every call
    """
    validate_entity_secret(entity_secret)

    public_key = serialization.load_pem_public_key(public_key_pem.encode("utf-8"))
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise ConfigurationError("Circle entity public key is not an RSA key")

    ciphertext = public_key.encrypt(
        bytes.fromhex(entity_secret),
        padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=None,
        ),
    )
    return base64.b64encode(ciphertext).decode("ascii")
