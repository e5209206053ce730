"""Root of the afterglow exception tree.

Every error carries two messages: a short one for the terminal and a
detailed one for the log file. The CLI shows `user_message` plus the
optional `recovery_hint`; handlers log `technical_message`.
"""

from typing import Optional


class AfterglowError(Exception):
    """
    Base exception for all afterglow errors.

    Attributes:
        user_message: Short message shown in the terminal
        technical_message: Message written to the log (defaults to user_message)
        recoverable: True if retrying after a fix can succeed (bad config file)
        recovery_hint: What the user can change, or None
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.technical_message!r})"

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
