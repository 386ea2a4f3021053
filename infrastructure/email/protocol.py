"""Notifier protocol - OTP services depend on this, not the concrete implementation."""

from typing import Any, Mapping, Protocol


class Notifier(Protocol):
    async def send(
        self,
        to_email: str,
        subject: str,
        template_kind: str,
        data: Mapping[str, Any],
    ) -> None:
        """Render *template_kind* with *data* and deliver it to *to_email*.

        Raises TransportError when delivery fails.
        """
        ...
