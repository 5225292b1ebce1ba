"""Named crawl speed presets (requests per second / burst)."""
from enum import Enum
from typing import NamedTuple, Union

from linkcheck.exceptions import ConfigError


class CheckSpeed(Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"
    FURIOUS = "furious"
    WARP = "warp"


class LinkcheckSpeed(NamedTuple):
    rate: float
    burst: int


CHECK_SPEED_MAP = {
    CheckSpeed.SLOW: LinkcheckSpeed(rate=1, burst=1),
    CheckSpeed.NORMAL: LinkcheckSpeed(rate=2, burst=2),
    CheckSpeed.FAST: LinkcheckSpeed(rate=10, burst=10),
    CheckSpeed.FURIOUS: LinkcheckSpeed(rate=20, burst=20),
    CheckSpeed.WARP: LinkcheckSpeed(rate=100, burst=100),
}


def parse_check_speed(speed: Union[CheckSpeed, str]) -> CheckSpeed:
    if isinstance(speed, CheckSpeed):
        return speed
    try:
        return CheckSpeed(str(speed).strip().lower())
    except ValueError:
        names = ", ".join(s.value for s in CheckSpeed)
        raise ConfigError("speed", f"{speed!r} is not one of {names}") from None


def get_check_speed(speed: Union[CheckSpeed, str]) -> LinkcheckSpeed:
    return CHECK_SPEED_MAP[parse_check_speed(speed)]
