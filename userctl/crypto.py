import base64
import hmac
import os
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

from .errors import HashingError

DEFAULT_KDF_ITERS = 200_000
SALT_BYTES = 16
SCHEME = b"pbkdf2_sha256"
BACKEND = default_backend()

def derive_key(secret: bytes, salt: bytes, kdf_iters: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=kdf_iters,
        backend=BACKEND
    )
    try:
        return kdf.derive(secret)
    except (UnsupportedAlgorithm, ValueError, TypeError) as e:
        raise HashingError(f"password hashing failed: {e}") from e


class Hasher:
    """One-way transform of a plaintext secret into a storable hash.

    The output embeds the scheme, iteration count and salt:
    ``pbkdf2_sha256$<iters>$<salt b64>$<key b64>``. A fixed ``salt``
    makes the transform deterministic; otherwise each call draws a
    fresh salt.
    """

    def __init__(self, iterations: int = DEFAULT_KDF_ITERS, salt: bytes | None = None):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations
        self.salt = salt

    def hash(self, secret: bytes) -> bytes:
        salt = self.salt if self.salt is not None else os.urandom(SALT_BYTES)
        key = derive_key(secret, salt, self.iterations)
        return b"$".join([
            SCHEME,
            str(self.iterations).encode(),
            base64.b64encode(salt),
            base64.b64encode(key),
        ])

def check_password(secret: bytes, hashed: bytes) -> bool:
    try:
        scheme, iters_raw, salt_b64, key_b64 = hashed.split(b"$")
        iters = int(iters_raw)
        salt = base64.b64decode(salt_b64, validate=True)
        expected = base64.b64decode(key_b64, validate=True)
    except ValueError:
        return False
    if scheme != SCHEME or iters < 1:
        return False
    return hmac.compare_digest(derive_key(secret, salt, iters), expected)
