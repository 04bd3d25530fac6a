"""One-time password value object."""

import secrets
from dataclasses import dataclass

OTP_MIN = 100000
OTP_MAX = 999999


@dataclass(frozen=True)
class OtpCode:
    """Six-digit numeric one-time code."""

    value: str

    def __post_init__(self) -> None:
        """Validate code format."""
        if len(self.value) != 6 or not (self.value.isascii() and self.value.isdigit()):
            raise ValueError("OTP code must be exactly 6 digits")

    @classmethod
    def generate(cls) -> "OtpCode":
        """
        Draw a code uniformly from 100000-999999.

        Returns:
            New OTP code
        """
        return cls(str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1)))

    def matches(self, submitted: str) -> bool:
        """
        Compare a submitted code, ignoring surrounding whitespace.

        Args:
            submitted: Code typed by the user

        Returns:
            True if the codes are equal
        """
        return secrets.compare_digest(
            self.value.encode("utf-8"), (submitted or "").strip().encode("utf-8")
        )

    def __str__(self) -> str:
        return self.value
