"""Formatting helpers for estimate output.

Provides the figures the way estimators quote them (e.g. 'AED 1,234,568'
and '48.25 MT' instead of raw floats).
"""

from __future__ import annotations


def format_aed(amount: float) -> str:
    """Format an AED amount.

    - Amounts >= 10,000: no fils, with comma separators (e.g. 'AED 1,234,567')
    - Amounts < 10,000: with fils (e.g. 'AED 9,876.54')
    """
    if abs(amount) >= 10_000:
        return f"AED {amount:,.0f}"
    return f"AED {amount:,.2f}"


def format_weight(weight_kg: float) -> str:
    """Format a weight: kilograms below one metric ton, otherwise 'MT'."""
    if abs(weight_kg) < 1000:
        return f"{weight_kg:,.0f} kg"
    return f"{weight_kg / 1000:,.2f} MT"


def format_rate(aed_per_mt: float) -> str:
    """Format a price per metric ton as 'AED X,XXX / MT'."""
    return f"AED {aed_per_mt:,.0f} / MT"
