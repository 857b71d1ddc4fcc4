"""
Stepper adjustments for a putt row (+/- buttons on the session screen).

Each helper returns the partial update body to PATCH, chosen so the
resulting pair always keeps 0 <= makes <= attempts:

    increment_attempts  attempts + 1
    decrement_attempts  attempts - 1, but never below makes
    increment_makes     makes + 1; bumps attempts too when they are equal
    decrement_makes     makes - 1, but never below 0
"""

from typing import Dict

from puttlog.services.stats import HasCounts


def increment_attempts(row: HasCounts) -> Dict[str, int]:
    return {"attempts": row.attempts + 1}


def decrement_attempts(row: HasCounts) -> Dict[str, int]:
    return {"attempts": max(row.makes, row.attempts - 1)}


def increment_makes(row: HasCounts) -> Dict[str, int]:
    # A make is also an attempt once every attempt is already a make
    if row.makes >= row.attempts:
        return {"attempts": row.attempts + 1, "makes": row.makes + 1}
    return {"makes": row.makes + 1}


def decrement_makes(row: HasCounts) -> Dict[str, int]:
    return {"makes": max(0, row.makes - 1)}


STEPPERS = {
    "increment_attempts": increment_attempts,
    "decrement_attempts": decrement_attempts,
    "increment_makes": increment_makes,
    "decrement_makes": decrement_makes,
}
