from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from zipmiles.models import DistanceFailure
from zipmiles.postal import InvalidFormatError
from zipmiles.service import DistanceService

LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class Leg:
    origin: str
    destination: str
    reference: str = ""


@dataclass(slots=True)
class LegMileage:
    leg: Leg
    miles: float
    estimated: bool
    note: str = ""


@dataclass(slots=True)
class MileageSummary:
    legs: list[LegMileage] = field(default_factory=list)

    @property
    def total_miles(self) -> float:
        return round(sum(item.miles for item in self.legs), 1)

    @property
    def estimated_count(self) -> int:
        return sum(1 for item in self.legs if item.estimated)


@dataclass(slots=True)
class PerMileQuote:
    origin: str
    destination: str
    rate: float
    miles: float | None = None
    amount: float | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and self.amount is not None

    @property
    def details(self) -> str:
        if not self.ok:
            return "; ".join(self.errors)
        return f"{self.miles:.1f} miles x ${self.rate:.2f}/mile = ${self.amount:.2f}"


class MileageAggregator:
    """Resolves many legs at once and never lets one bad leg sink the batch.

    A leg that cannot be resolved gets ``default_miles`` and is flagged as an
    estimate so the substitution is visible downstream.
    """

    def __init__(
        self,
        service: DistanceService,
        default_miles: float | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.service = service
        self.default_miles = (
            default_miles if default_miles is not None else service.config.default_leg_miles
        )
        self.max_workers = max_workers or service.config.max_workers

    def leg_mileage(self, leg: Leg) -> LegMileage:
        try:
            outcome = self.service.resolve_distance(leg.origin, leg.destination)
        except InvalidFormatError as exc:
            note = str(exc)
        except Exception as exc:  # noqa: BLE001
            LOG.exception("leg ref=%s %s->%s failed", leg.reference, leg.origin, leg.destination)
            note = f"{type(exc).__name__}: {exc}"
        else:
            if not isinstance(outcome, DistanceFailure):
                return LegMileage(leg=leg, miles=outcome.miles, estimated=False)
            note = str(outcome)

        LOG.warning(
            "using default miles=%s for leg ref=%s %s->%s: %s",
            self.default_miles,
            leg.reference,
            leg.origin,
            leg.destination,
            note,
        )
        return LegMileage(leg=leg, miles=self.default_miles, estimated=True, note=note)

    def aggregate(self, legs: Sequence[Leg]) -> MileageSummary:
        if not legs:
            return MileageSummary()
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return MileageSummary(legs=list(pool.map(self.leg_mileage, legs)))

    def aggregate_by_driver(self, legs_by_driver: Mapping[str, Sequence[Leg]]) -> dict[str, MileageSummary]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                driver: pool.submit(self._summarize_sequential, legs)
                for driver, legs in legs_by_driver.items()
            }
            return {driver: future.result() for driver, future in futures.items()}

    def _summarize_sequential(self, legs: Sequence[Leg]) -> MileageSummary:
        return MileageSummary(legs=[self.leg_mileage(leg) for leg in legs])


def quote_per_mile(service: DistanceService, origin: str, destination: str, rate: float) -> PerMileQuote:
    quote = PerMileQuote(origin=origin, destination=destination, rate=rate)

    rate_check = service.validate_per_mile_rate(rate)
    quote.errors.extend(rate_check.errors)
    quote.warnings.extend(rate_check.warnings)
    if quote.errors:
        return quote

    try:
        outcome = service.resolve_distance(origin, destination)
    except InvalidFormatError as exc:
        quote.errors.append(str(exc))
        return quote
    if isinstance(outcome, DistanceFailure):
        quote.errors.append("Unable to calculate distance between postal codes")
        return quote

    distance_check = service.validate_distance(origin, destination, outcome.miles)
    quote.warnings.extend(distance_check.warnings)
    if not distance_check.is_valid:
        quote.errors.append(f"Distance validation failed: {distance_check.first_error}")
        return quote

    quote.miles = outcome.miles
    quote.amount = round(outcome.miles * rate, 2)
    LOG.info("per-mile quote %s->%s %s", origin, destination, quote.details)
    return quote
