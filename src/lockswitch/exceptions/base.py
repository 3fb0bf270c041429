"""Root of the lockswitch exception tree.

Every failure lockswitch reports, from a missing ``xset`` binary to a key
that refuses to switch, derives from `LockSwitchError`. Each error carries
two texts: a short one for the CLI and a detailed one for the log file.
"""

from typing import Optional


class LockSwitchError(Exception):
    """
    Base exception for lockswitch.

    Attributes:
        user_message: One line shown by the CLI, e.g. "Num Lock could not be turned on"
        technical_message: What went to the log: command lines, exit codes, raw output
        recoverable: True when retrying, or fixing the environment, can succeed
        recovery_hint: What the user can do about it, if anything is known
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        """
        Args:
            user_message: Shown to the user
            technical_message: Logged (default: `user_message`)
            recoverable: Whether the failed operation may be retried
            recovery_hint: Suggested fix, shown under the message
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """The user message followed by the recovery hint, as the CLI prints it."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
