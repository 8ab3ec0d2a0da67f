"""FeeLevels: recommended network fee tiers (sat/vB)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FeeLevels:
    """Fast / medium / slow fee estimates in sat/vB."""

    fast: int
    """Next-block fee (mempool.space fastestFee)."""
    medium: int
    """About half an hour (halfHourFee); compared against user thresholds."""
    slow: int
    """About an hour (hourFee)."""

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> FeeLevels:
        """Build from GET /api/v1/fees/recommended.

        Raises:
            KeyError, TypeError, ValueError: If a tier is missing or not numeric.
        """
        return cls(
            fast=int(response["fastestFee"]),
            medium=int(response["halfHourFee"]),
            slow=int(response["hourFee"]),
        )
