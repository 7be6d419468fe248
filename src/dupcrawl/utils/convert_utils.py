"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size conversions for option values (buffer size, sample threshold) and reports.
Units are binary: 1K = 1024 bytes. The trailing "B" is optional.
"""
import math
import re

_UNIT_POWERS = {"": 0, "K": 1, "M": 2, "G": 3, "T": 4, "P": 5}
_SIZE_PATTERN = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:E[+-]?\d+)?)\s*(?P<unit>[KMGTP]?)B?$"
)


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in ("B", "KB", "MB", "GB", "TB"):
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}PB"

    @staticmethod
    def human_to_bytes(size_str: str, allow_zero: bool = True) -> int:
        """
        Parse '64K', '1.5GB', '100M', '4096' and the like into bytes.

        Raises ValueError for malformed, negative, infinite or NaN sizes,
        and for sizes that round down to zero when allow_zero is False.
        """
        text = str(size_str).strip().upper()
        match = _SIZE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 64K, 1M, etc."
            )

        value = float(match.group("number"))
        if not math.isfinite(value):
            raise ValueError(f"Size is not a finite number: '{size_str}'")
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        scaled = value * 1024 ** _UNIT_POWERS[match.group("unit")]
        if not math.isfinite(scaled):
            raise ValueError(f"Size is too large: '{size_str}'")

        result = int(scaled)
        if result == 0 and not allow_zero:
            raise ValueError(f"Size must be at least 1 byte: '{size_str}'")
        return result

    @staticmethod
    def is_valid_size_format(size_str: str, allow_zero: bool = True) -> bool:
        """Check if the input string parses as a size."""
        try:
            ConvertUtils.human_to_bytes(size_str, allow_zero=allow_zero)
            return True
        except ValueError:
            return False
