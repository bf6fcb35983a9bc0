"""Business configuration for a payroll run.

The authoritative rates and PAYE bands belong to the system owner and are
supplied through settings (``PAYROLL_RULES``). Each rule set is tagged with
the tax year it was issued for so a stale table is not applied silently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_decimal
from ..core.exceptions import ConfigurationError, ValidationError
from .model import PayrollPeriod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayeBand:
    """Income up to ``upper`` (None = no limit) is taxed at ``rate``."""

    upper: Optional[Decimal]
    rate: Decimal


@dataclass(frozen=True)
class PayrollRules:
    tax_year: int
    extra_shift_rate: Decimal
    absence_daily_rate: Decimal
    napsa_rate: Decimal
    napsa_ceiling: Decimal
    nhima_rate: Decimal
    paye_bands: tuple[PayeBand, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PayrollRules":
        try:
            bands = tuple(
                PayeBand(
                    upper=None if upper is None else require_decimal(upper, "paye_bands.upper"),
                    rate=require_decimal(rate, "paye_bands.rate"),
                )
                for upper, rate in data["paye_bands"]
            )
            rules = cls(
                tax_year=int(data["tax_year"]),
                extra_shift_rate=require_decimal(data["extra_shift_rate"], "extra_shift_rate"),
                absence_daily_rate=require_decimal(data["absence_daily_rate"], "absence_daily_rate"),
                napsa_rate=require_decimal(data["napsa_rate"], "napsa_rate"),
                napsa_ceiling=require_decimal(data["napsa_ceiling"], "napsa_ceiling"),
                nhima_rate=require_decimal(data["nhima_rate"], "nhima_rate"),
                paye_bands=bands,
            )
        except KeyError as e:
            raise ConfigurationError(f"PAYROLL_RULES is missing {e.args[0]!r}")
        except (ValidationError, ValueError, TypeError) as e:
            raise ConfigurationError(f"PAYROLL_RULES: {e}")

        _check_bands(rules.paye_bands)
        return rules

    def check_period(self, period: PayrollPeriod, *, confirmed: bool = False) -> None:
        """Refuse to apply this table outside its tax year unless confirmed."""

        years = {period.start_date.year, period.end_date.year}
        if years == {self.tax_year}:
            return
        if not confirmed:
            raise ConfigurationError(
                f"Payroll rules are for tax year {self.tax_year}, "
                f"period '{period.period_name}' falls in {', '.join(str(y) for y in sorted(years))}; "
                "confirm to apply them anyway"
            )
        logger.warning(
            "Applying %s payroll rules to period %s (%s..%s) on explicit confirmation",
            self.tax_year,
            period.period_name,
            period.start_date,
            period.end_date,
        )


def _check_bands(bands: Sequence[PayeBand]) -> None:
    if not bands:
        raise ConfigurationError("PAYROLL_RULES.paye_bands is empty")
    if bands[-1].upper is not None:
        raise ConfigurationError("The last PAYE band must have no upper limit")

    previous = Decimal("0")
    for band in bands[:-1]:
        if band.upper is None or band.upper <= previous:
            raise ConfigurationError("PAYE band limits must be increasing")
        previous = band.upper
