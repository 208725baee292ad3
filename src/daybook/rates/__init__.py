"""Exchange rate service access."""

from daybook.rates.client import RateClient

__all__ = ["RateClient"]
