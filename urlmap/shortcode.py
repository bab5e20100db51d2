"""Short code generation utilities."""

import secrets
import string
from typing import Optional


MAX_CODE_LENGTH = 10


class ShortCodeGenerator:
    """Generate random short codes.
    
    Codes are not unique on their own; the storage backend rejects duplicates
    and the service retries with a fresh candidate.
    """
    
    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9
    
    def __init__(self, default_length: int = 7):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
        """
        self._check_length(default_length)
        self.default_length = default_length
    
    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.
        
        Each character is drawn uniformly from the 62-symbol alphabet.
        
        Args:
            length: Length of the code (uses default if not specified)
            
        Returns:
            Random short code
            
        Raises:
            ValueError: If length is outside [1, MAX_CODE_LENGTH]
        """
        if length is None:
            length = self.default_length
        self._check_length(length)
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))
    
    @staticmethod
    def _check_length(length: int) -> None:
        if not 1 <= length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"Short code length must be between 1 and {MAX_CODE_LENGTH}, got {length}"
            )
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (alphanumeric).
        
        Args:
            code: Code to validate
            
        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
