"""Outbound notification port."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Delivers password reset links to users out-of-band."""

    @abstractmethod
    def send_password_reset(self, email: str, reset_link: str, user_name: str) -> None:
        """Send the reset link.

        Raises
        ------
        Exception
            Any delivery failure. Callers decide whether to surface it.
        """
