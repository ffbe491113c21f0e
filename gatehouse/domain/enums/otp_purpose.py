"""Purposes an OTP challenge can be issued for.

At most one active challenge exists per (email, purpose) pair, so a login
code and a registration code for the same address never interfere.
"""

from enum import Enum


class OtpPurpose(str, Enum):
    """What an OTP challenge unlocks."""

    LOGIN = "login"
    REGISTRATION = "registration"
    VERIFICATION = "verification"
    TWO_FACTOR = "two_factor"

    @property
    def email_subject(self) -> str:
        """Subject line for the email that carries the code."""
        return _SUBJECTS[self]


_SUBJECTS = {
    OtpPurpose.LOGIN: "Your login code",
    OtpPurpose.REGISTRATION: "Verify your registration",
    OtpPurpose.VERIFICATION: "Your verification code",
    OtpPurpose.TWO_FACTOR: "Your admin verification code",
}
