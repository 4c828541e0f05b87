from __future__ import annotations

from dataclasses import dataclass

from smarttube.application.dto.auth import AuthUserOutput
from smarttube.application.dto.usage import FeatureUsageOutput


@dataclass(frozen=True)
class MeOutput:
    user: AuthUserOutput
    plan_name: str
    usage: list[FeatureUsageOutput]
