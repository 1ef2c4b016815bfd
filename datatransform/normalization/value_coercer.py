import re
import math
import time
from datetime import datetime, timezone
from typing import Any, Optional, Union


Number = Union[int, float]


class ValueCoercer:
    # Checked in order; "1千万" reads as 1千 x 10,000
    MAGNITUDE_SUFFIXES = (
        ("亿", 100_000_000),
        ("万", 10_000),
        ("千", 1_000),
    )

    # Below this an epoch value is seconds, at or above it milliseconds
    MILLIS_THRESHOLD = 10_000_000_000

    LEADING_FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
    NUMERIC_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')

    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
        "%Y/%m/%d %H:%M:%S",
        "%Y/%m/%d",
    ]

    @classmethod
    def coerce_number(cls, value: Any) -> Number:
        """
        Parse counts like 42, "1,024", "1.5万" or "2千" into a plain number.

        Never raises: anything unparseable becomes 0.
        """
        if isinstance(value, bool):
            return 0

        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return 0
            return value

        if not isinstance(value, str):
            return 0

        text = value.strip().replace(",", "")

        for suffix, multiplier in cls.MAGNITUDE_SUFFIXES:
            if suffix in text:
                prefix = cls._parse_leading_float(text.replace(suffix, ""))
                if prefix is None:
                    return 0
                return cls._tidy(prefix * multiplier)

        parsed = cls._parse_leading_float(text)
        if parsed is None:
            return 0
        return cls._tidy(parsed)

    @classmethod
    def to_epoch_millis(cls, value: Any) -> int:
        """
        Normalize seconds, milliseconds, numeric strings and date strings
        to a millisecond epoch integer.

        Missing or unparseable input returns the current time in ms.
        """
        if isinstance(value, bool):
            return cls._now_millis()

        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return cls._now_millis()
            return cls._scale_epoch(value)

        if isinstance(value, str):
            text = value.strip()

            if cls.NUMERIC_PATTERN.match(text):
                if not cls._is_fractional(text):
                    try:
                        return cls._scale_epoch(int(text))
                    except ValueError:
                        # past the interpreter's int digit limit
                        return cls._now_millis()
                parsed = float(text)
                if not math.isfinite(parsed):
                    return cls._now_millis()
                # Integer part only: "1700000000.5" is 1700000000 seconds
                return cls._scale_epoch(math.trunc(parsed))

            dt = cls._parse_datetime(text)
            if dt is not None:
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return int(dt.timestamp() * 1000)

        return cls._now_millis()

    @classmethod
    def _scale_epoch(cls, value: Number) -> int:
        if abs(value) < cls.MILLIS_THRESHOLD:
            return int(value * 1000)
        return int(value)

    @classmethod
    def _parse_leading_float(cls, text: str) -> Optional[float]:
        match = cls.LEADING_FLOAT_PATTERN.match(text.strip())
        if not match:
            return None
        parsed = float(match.group(0))
        if not math.isfinite(parsed):
            return None
        return parsed

    @classmethod
    def _is_fractional(cls, text: str) -> bool:
        return any(ch in text for ch in ".eE")

    @classmethod
    def _tidy(cls, value: float) -> Number:
        # 1.2 * 1e8 lands a hair off 120000000
        nearest = round(value)
        if abs(value - nearest) < 1e-6:
            return int(nearest)
        return value

    @classmethod
    def _parse_datetime(cls, value: str) -> Optional[datetime]:
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None

    @classmethod
    def _now_millis(cls) -> int:
        return int(time.time() * 1000)
