import math
from collections.abc import Mapping

from prompt_builder import config
from prompt_builder.models import PlatformLimit


class UnknownPlatformError(ValueError):
    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Unknown platform: {platform}")


def platform_limit(platform: str, limits: Mapping[str, PlatformLimit] | None = None) -> PlatformLimit:
    table = config.PLATFORM_LIMITS if limits is None else limits
    try:
        return table[platform]
    except KeyError:
        raise UnknownPlatformError(str(platform)) from None


def limit_for(platform: str, limits: Mapping[str, PlatformLimit] | None = None) -> int:
    return platform_limit(platform, limits).max_chars


def is_over_limit(text: str, platform: str, limits: Mapping[str, PlatformLimit] | None = None) -> bool:
    return len(text) > limit_for(platform, limits)


def usage_percent(text: str, platform: str, limits: Mapping[str, PlatformLimit] | None = None) -> int:
    # Half-up rounding, so 12.5% reads as 13 rather than Python's banker's 12
    return math.floor(100 * len(text) / limit_for(platform, limits) + 0.5)


def format_char_count(count: int) -> str:
    if count >= 1000:
        return f"{math.floor(count / 100 + 0.5) / 10:.1f}k"
    return str(count)
