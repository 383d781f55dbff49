"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. The cost
factor comes from settings (default 10 rounds); each +1 doubles the work.

bcrypt is CPU-bound. Callers on the event loop should run hash/verify
through asyncio.to_thread so one login doesn't stall every other request.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes of input.
_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted hashing and verification of secrets."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        # Used to burn equivalent time when there is no stored hash to check.
        self._dummy_hash = self.hash("voyagehub-timing-equaliser")

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Produces a "$2b$<rounds>$..." string safe to store as-is.
        """
        pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        bcrypt.checkpw compares in constant time. A malformed hash is
        treated as a mismatch rather than an error.
        """
        try:
            pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
            return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend one verification's worth of time, always failing."""
        self.verify(password, self._dummy_hash)
        return False
