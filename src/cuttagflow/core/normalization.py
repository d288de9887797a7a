"""Spike-in normalization factors.

Each sample is subsampled to the depth of the sample with fewer spike-in
reads, so the factor of a sample is ``min(counts) / count``. Factors are
truncated (not rounded) to six decimal places.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from cuttagflow.constants import NORM_FACTOR_PRECISION
from cuttagflow.core.pipeline_types import SampleRole
from cuttagflow.exceptions import SpikeinCountError, ValidationError
from cuttagflow.utils.logging import get_logger

_QUANTUM = Decimal(1).scaleb(-NORM_FACTOR_PRECISION)


@dataclass(frozen=True)
class NormalizationFactors:
    """Subsampling proportions for the treatment and control samples."""

    treatment: Decimal
    control: Decimal

    def for_role(self, role: SampleRole) -> Decimal:
        return self.treatment if role is SampleRole.TREATMENT else self.control

    def as_argument(self, role: SampleRole) -> str:
        """Fixed-point text passed to the subsampler, e.g. ``0.250000``."""
        return f"{self.for_role(role):.{NORM_FACTOR_PRECISION}f}"

    def to_dict(self) -> dict[str, str]:
        return {role.label: self.as_argument(role) for role in SampleRole}


def _check_count(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} spike-in count must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} spike-in count must be >= 0, got {value}")
    return value


def truncate_factor(numerator: int, denominator: int) -> Decimal:
    """``numerator / denominator`` truncated to the factor precision."""
    return (Decimal(numerator) / Decimal(denominator)).quantize(_QUANTUM, rounding=ROUND_DOWN)


def compute_normalization_factors(count_treatment: int, count_control: int) -> NormalizationFactors:
    """Factors that bring both samples down to the smaller spike-in depth.

    Raises:
        ValidationError: a count is negative or not an integer.
        SpikeinCountError: a count is zero, or a factor truncates to zero.
    """
    count_treatment = _check_count("Treatment", count_treatment)
    count_control = _check_count("Control", count_control)

    min_count = min(count_treatment, count_control)
    if min_count == 0:
        zero = "Treatment" if count_treatment == 0 else "Control"
        raise SpikeinCountError(
            f"{zero} has zero spike-in reads; cannot compute normalization factors "
            f"(treatment={count_treatment}, control={count_control})"
        )

    factors = NormalizationFactors(
        treatment=truncate_factor(min_count, count_treatment),
        control=truncate_factor(min_count, count_control),
    )
    for role in SampleRole:
        if factors.for_role(role) == 0:
            raise SpikeinCountError(
                f"Insufficient spike-in depth: {role.label} factor truncates to zero "
                f"(treatment={count_treatment}, control={count_control})"
            )
    return factors


class NormalizationCalculator:
    """Compute factors and log them."""

    def __init__(self):
        self.logger = get_logger("normalization")

    def compute(self, count_treatment: int, count_control: int) -> NormalizationFactors:
        factors = compute_normalization_factors(count_treatment, count_control)
        self.logger.info(
            f"Spike-in reads: Treatment={count_treatment:,} Control={count_control:,}"
        )
        self.logger.info(
            f"Normalization factors: Treatment={factors.as_argument(SampleRole.TREATMENT)} "
            f"Control={factors.as_argument(SampleRole.CONTROL)}"
        )
        return factors
