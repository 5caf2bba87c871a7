from __future__ import annotations
import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"


class PasswordHasher:
    """
    Salted PBKDF2-HMAC-SHA256 hasher.
    Encoded form: pbkdf2_sha256$<iterations>$<salt>$<hex digest>
    """
    def __init__(self, iterations: int = 100_000, salt_bytes: int = 16):
        if iterations < 1:
            raise ValueError("PasswordHasher requires a positive iteration count")
        self.iterations = iterations
        self.salt_bytes = salt_bytes
        self.max_iterations = 10 * iterations

    def _derive(self, plaintext: str, salt: str, iterations: int) -> str:
        dk = hashlib.pbkdf2_hmac("sha256", plaintext.encode("utf-8"), salt.encode("utf-8"), iterations, dklen=32)
        return dk.hex()

    def encode(self, plaintext: str) -> str:
        salt = secrets.token_hex(self.salt_bytes)
        return f"{ALGORITHM}${self.iterations}${salt}${self._derive(plaintext, salt, self.iterations)}"

    def matches(self, plaintext: str, hashed: str) -> bool:
        try:
            algorithm, iters_s, salt, hex_dk = hashed.split("$")
            iterations = int(iters_s)
            # Bound the work a stored hash can demand of a login.
            if algorithm != ALGORITHM or not 1 <= iterations <= self.max_iterations:
                return False
            candidate = self._derive(plaintext, salt, iterations)
            return hmac.compare_digest(candidate, hex_dk)
        except (AttributeError, OverflowError, TypeError, ValueError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """True when the stored hash was produced under a different policy."""
        try:
            algorithm, iters_s, _, _ = hashed.split("$")
            return algorithm != ALGORITHM or int(iters_s) != self.iterations
        except (AttributeError, ValueError):
            return True
