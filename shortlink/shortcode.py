"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.default_length = default_length
        # Seeded from os.urandom, so codes differ across runs and processes
        self._random = random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every character is drawn independently and uniformly from BASE62_CHARS.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        if length is None:
            length = self.default_length
        if length < 1:
            raise ValueError("length must be positive")
        return ''.join(self._random.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code is a non-empty string of base62 characters.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        if not code or not isinstance(code, str):
            return False
        return all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
