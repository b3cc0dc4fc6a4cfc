"""Second-opinion checks for distances and per-mile rates before billing.

Nothing in here touches the engine, its caches or the network; region context
comes from the static prefix table only.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from zipmiles.models import ValidationOutcome
from zipmiles.postal import normalize_postal_code, validate_postal_code
from zipmiles.regions import region_for_prefix

LOG = logging.getLogger(__name__)

MIN_VALID_DISTANCE = 0.0
MAX_VALID_DISTANCE = 3500.0
SAME_CODE_MAX_DISTANCE = 10.0
SAME_REGION_WARNING_DISTANCE = 500.0
LONG_DISTANCE_WARNING = 2500.0

MAX_PER_MILE_RATE = 10.0
LOW_RATE_WARNING = 0.50
HIGH_RATE_WARNING = 5.00


class DistanceValidationGuard:
    def validate_postal_code(self, code: str | None) -> ValidationOutcome:
        return validate_postal_code(code)

    def validate_distance(
        self, origin: str | None, destination: str | None, miles: float
    ) -> ValidationOutcome:
        outcome = ValidationOutcome()

        origin_check = validate_postal_code(origin)
        if not origin_check.is_valid:
            outcome.add_error(f"Invalid origin postal code: {origin_check.first_error}")
            return outcome
        destination_check = validate_postal_code(destination)
        if not destination_check.is_valid:
            outcome.add_error(f"Invalid destination postal code: {destination_check.first_error}")
            return outcome

        outcome.warnings.extend(origin_check.warnings)
        outcome.warnings.extend(destination_check.warnings)

        if not math.isfinite(miles):
            outcome.add_error("Invalid distance: not a finite number")
            return outcome
        if miles < MIN_VALID_DISTANCE:
            outcome.add_error("Invalid distance: cannot be negative")
            return outcome
        if miles > MAX_VALID_DISTANCE:
            outcome.add_error(
                f"Invalid distance: {miles:.1f} miles exceeds maximum continental US distance"
            )
            return outcome

        origin_code = normalize_postal_code(origin)
        destination_code = normalize_postal_code(destination)
        if origin_code == destination_code:
            if miles > SAME_CODE_MAX_DISTANCE:
                outcome.add_warning(f"Distance of {miles:.1f} miles seems high for same postal code")
        else:
            region = region_for_prefix(origin_code)
            if (
                region is not None
                and region == region_for_prefix(destination_code)
                and miles > SAME_REGION_WARNING_DISTANCE
            ):
                outcome.add_warning(
                    f"Distance of {miles:.1f} miles seems high for two postal codes in {region}"
                )

        if miles > LONG_DISTANCE_WARNING:
            outcome.add_warning(f"Very long distance ({miles:.1f} miles) - please verify")

        if outcome.warnings:
            LOG.debug("distance %s-%s miles=%s warnings=%s", origin_code, destination_code, miles, outcome.warnings)
        return outcome

    def validate_per_mile_rate(self, rate: float) -> ValidationOutcome:
        outcome = ValidationOutcome()
        if not math.isfinite(rate):
            outcome.add_error("Per-mile rate must be a finite number")
            return outcome
        if rate <= 0:
            outcome.add_error("Per-mile rate must be greater than $0")
            return outcome
        if rate > MAX_PER_MILE_RATE:
            outcome.add_error(f"Per-mile rate cannot exceed ${MAX_PER_MILE_RATE:.0f} per mile")
            return outcome

        if rate < LOW_RATE_WARNING:
            outcome.add_warning(f"Per-mile rate of ${rate:.2f} seems unusually low")
        elif rate > HIGH_RATE_WARNING:
            outcome.add_warning(f"Per-mile rate of ${rate:.2f} seems unusually high")
        return outcome

    def validate_batch(self, pairs: Sequence[Sequence[str]]) -> list[ValidationOutcome]:
        if not pairs:
            outcome = ValidationOutcome()
            outcome.add_error("No postal code pairs provided")
            return [outcome]

        results: list[ValidationOutcome] = []
        for pair in pairs:
            outcome = ValidationOutcome()
            if len(pair) < 2:
                outcome.add_error("Invalid pair format")
                results.append(outcome)
                continue

            origin_check = validate_postal_code(pair[0])
            destination_check = validate_postal_code(pair[1])
            if not origin_check.is_valid:
                outcome.add_error(f"Invalid origin: {origin_check.first_error}")
            if not destination_check.is_valid:
                outcome.add_error(f"Invalid destination: {destination_check.first_error}")
            if outcome.is_valid:
                outcome.warnings.extend(origin_check.warnings)
                outcome.warnings.extend(destination_check.warnings)
            results.append(outcome)
        return results

    def sanity_check_message(self, miles: float) -> str:
        if miles < 0:
            return "Distance cannot be negative"
        if miles == 0:
            return "Same location - no distance"
        if miles < 1:
            return "Very short distance - within same area"
        if miles > 3000:
            return "Extremely long distance - verify postal codes"
        if miles > 2000:
            return "Cross-country distance - typical for coast-to-coast"
        if miles > 1000:
            return "Long distance - multiple states"
        if miles > 500:
            return "Regional distance - crossing state lines"
        if miles > 200:
            return "In-state long distance"
        if miles > 50:
            return "Regional delivery"
        return "Local delivery"
