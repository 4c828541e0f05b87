from __future__ import annotations

from typing import Protocol


class FormRelayPort(Protocol):
    def submit(self, *, form_type: str, fields: dict[str, str]) -> tuple[bool, str]:
        """Returns the relay's success flag and message."""
        ...
