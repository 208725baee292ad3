"""CAD/IDR currency conversion with a persisted rate cache."""

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dateutil import parser as date_parser

from daybook.domain.errors import RateFetchError, ValidationError
from daybook.rates.client import RateClient
from daybook.utils.formatting import (
    CENTS,
    WHOLE,
    format_datetime_human,
    format_date_short,
    format_plain_idr,
    is_storable_amount,
    round_amount,
)

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = ".rate_cache.json"
DEFAULT_CAD_TO_IDR = Decimal("11800.0")


def _to_decimal(amount: Decimal | int | float) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _parse_timestamp(value: object) -> datetime | None:
    """Parse a stored timestamp; empty or zero-year values mean never."""
    if not isinstance(value, str) or not value.strip():
        return None
    parsed = date_parser.parse(value)
    if parsed.year <= 1:
        return None
    return parsed


@dataclass(frozen=True)
class RateCache:
    """Last known CAD->IDR rate and when it was fetched (None = never)."""

    cad_to_idr: Decimal = DEFAULT_CAD_TO_IDR
    last_updated: datetime | None = None

    @classmethod
    def from_json(cls, data: object) -> "RateCache":
        """Build a cache from decoded JSON.

        Raises:
            ValueError: If the document does not hold a usable rate
        """
        if not isinstance(data, dict):
            raise ValueError("rate cache is not a JSON object")
        rate = data["cad_to_idr"]
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise ValueError(f"invalid cached rate: {rate!r}")
        cad_to_idr = Decimal(str(rate))
        if not cad_to_idr.is_finite():
            raise ValueError(f"invalid cached rate: {rate!r}")
        return cls(cad_to_idr=cad_to_idr, last_updated=_parse_timestamp(data.get("last_updated")))

    def to_json(self) -> dict:
        return {
            "cad_to_idr": float(self.cad_to_idr),
            "last_updated": self.last_updated.isoformat() if self.last_updated else "",
        }


class CurrencyConverter:
    """Converts between CAD and IDR using a cached exchange rate.

    A fetched rate stays in use indefinitely; only refresh_rate() replaces
    it. When a refresh fails the previous rate is kept and the converter
    reports itself offline until a later refresh succeeds.
    """

    def __init__(self, cache_dir: str | Path, client: RateClient | None = None):
        """Initialize converter, loading any cached rate.

        Never raises: an unreadable cache falls back to the default rate.

        Args:
            cache_dir: Directory holding .rate_cache.json
            client: Rate service client (defaults to RateClient())
        """
        self.cache_dir = Path(cache_dir)
        self.client = client or RateClient()
        self.cache = self._load_cache()
        self._offline = False
        self._last_error: RateFetchError | None = None
        self._refresh_lock = threading.Lock()

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / CACHE_FILE_NAME

    def _load_cache(self) -> RateCache:
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                return RateCache.from_json(json.load(f))
        except FileNotFoundError:
            return RateCache()
        except (OSError, ValueError, TypeError, KeyError, OverflowError, InvalidOperation) as e:
            logger.warning("Ignoring unreadable rate cache %s: %s", self.cache_path, e)
            return RateCache()

    def _save_cache(self) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(self.cache_path, "w", encoding="utf-8") as f:
                json.dump(self.cache.to_json(), f, indent=2)
        except OSError as e:
            # The fresh rate stays in memory for this session
            logger.error("Failed to write rate cache %s: %s", self.cache_path, e)

    def refresh_rate(self) -> bool:
        """Fetch the latest rate from the service.

        Concurrent calls are serialized.

        Returns:
            True if a fresh rate was obtained, False if now offline
        """
        with self._refresh_lock:
            try:
                rate = self.client.fetch_cad_to_idr()
            except RateFetchError as e:
                logger.warning("Rate refresh failed, keeping cached rate: %s", e)
                self._offline = True
                self._last_error = e
                return False

            self.cache = RateCache(
                cad_to_idr=Decimal(str(rate)),
                last_updated=datetime.now().astimezone(),
            )
            self._offline = False
            self._last_error = None
            self._save_cache()
            logger.info("Exchange rate updated: %s", self.format_rate())
            return True

    def start_background_refresh(self) -> threading.Thread:
        """Run refresh_rate() on a daemon thread and return the thread."""
        thread = threading.Thread(target=self.refresh_rate, name="rate-refresh", daemon=True)
        thread.start()
        return thread

    def cad_to_idr_rate(self) -> Decimal:
        return self.cache.cad_to_idr

    def idr_to_cad_rate(self) -> Decimal:
        if self.cache.cad_to_idr == 0:
            return Decimal("0")
        return Decimal("1") / self.cache.cad_to_idr

    def cad_to_idr(self, amount: Decimal | int | float) -> Decimal:
        return _to_decimal(amount) * self.cache.cad_to_idr

    def idr_to_cad(self, amount: Decimal | int | float) -> Decimal:
        if self.cache.cad_to_idr == 0:
            return Decimal("0")
        return _to_decimal(amount) / self.cache.cad_to_idr

    def fill_amounts(
        self, cad: Decimal | None, idr: Decimal | None
    ) -> tuple[Decimal, Decimal]:
        """Return (cad, idr), converting whichever side is None.

        A converted CAD amount is rounded to cents, a converted IDR amount to
        whole rupiah. Amounts given by the caller are returned unchanged.

        Raises:
            ValidationError: If both sides are None or the converted amount
                is out of range
        """
        if cad is None and idr is None:
            raise ValidationError("Provide a CAD or IDR amount")
        if cad is not None and idr is not None:
            return cad, idr

        converted = self.idr_to_cad(idr) if cad is None else self.cad_to_idr(cad)
        if not is_storable_amount(converted):
            raise ValidationError(f"Converted amount {converted} is out of range")
        if cad is None:
            return round_amount(converted, CENTS), idr
        return cad, round_amount(converted, WHOLE)

    def is_offline(self) -> bool:
        return self._offline

    def last_error(self) -> RateFetchError | None:
        return self._last_error

    def last_updated(self) -> datetime | None:
        return self.cache.last_updated

    def _local_last_updated(self) -> datetime | None:
        moment = self.cache.last_updated
        if moment is not None and moment.tzinfo is not None:
            return moment.astimezone()
        return moment

    def last_updated_string(self) -> str:
        moment = self._local_last_updated()
        if moment is None:
            return "never (using default rate)"
        return format_datetime_human(moment)

    def format_rate(self) -> str:
        return f"1 CAD = {format_plain_idr(self.cache.cad_to_idr)} IDR"

    def status_message(self) -> str:
        """One-line rate status for display.

        Three cases: never updated (default rate), offline with an older
        successful update, and online.
        """
        moment = self._local_last_updated()
        if moment is None:
            prefix = "Offline - " if self._offline else ""
            return f"{prefix}Using default rate {self.format_rate()} (never updated)"
        if self._offline:
            return f"Offline - using cached rate from {format_date_short(moment)} ({self.format_rate()})"
        return f"Rate: {self.format_rate()} (updated {format_date_short(moment)})"
