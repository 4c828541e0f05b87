from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


SupportFormType = Literal["Contact Support", "Bug Report", "Feature Request"]
SUPPORT_FORM_TYPES = ("Contact Support", "Bug Report", "Feature Request")


@dataclass(frozen=True)
class SupportSubmissionInput:
    form_type: SupportFormType
    name: str
    email: str
    fields: dict[str, str]


@dataclass(frozen=True)
class SupportSubmissionOutput:
    success: bool
    message: str
