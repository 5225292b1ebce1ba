import logging
import os
from typing import Any, Optional

import yaml

from linkcheck.domain.check_speed import parse_check_speed
from linkcheck.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Keys passed straight to LinkChecker, with the type each is coerced to.
_CHECKER_KEYS = {
    "rate": float,
    "burst": int,
    "timeout": float,
    "buffer_size": int,
    "verbose": bool,
    "silent": bool,
    "progress": bool,
}


def parse_check_config(data: Any, source: str = "<config>") -> dict:
    """Validate a check config mapping and return it as LinkChecker options.

    The optional `site` key is returned alongside the options.
    """
    if not isinstance(data, dict):
        raise ConfigError(source, "expected a mapping at the top level")

    cfg: dict = {}
    site = data.get("site")
    if site is not None:
        cfg["site"] = str(site)

    speed = data.get("speed")
    if speed is not None:
        cfg["speed"] = parse_check_speed(speed)

    for key, cast in _CHECKER_KEYS.items():
        if data.get(key) is None:
            continue
        try:
            cfg[key] = cast(data[key])
        except (TypeError, ValueError):
            raise ConfigError(f"{source}: {key}", f"cannot use {data[key]!r}") from None

    if ("rate" in cfg) != ("burst" in cfg):
        raise ConfigError(source, "rate and burst must be given together")
    return cfg


def load_check_config(path: str) -> dict:
    """Load one YAML check config file.

    Recognised keys: site, speed, rate, burst, timeout, buffer_size,
    verbose, silent, progress. Other keys are ignored.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return parse_check_config(data or {}, source=os.path.basename(path))


def load_check_configs_from_dir(path: Optional[str] = None) -> list[dict]:
    """Load every YAML check config in `path` (default ./configs).

    Files that cannot be read or validated are logged and skipped.
    """
    base = path or os.path.join(os.getcwd(), "configs")
    configs = []
    if not os.path.isdir(base):
        return configs

    for fname in sorted(os.listdir(base)):
        if not (fname.endswith(".yml") or fname.endswith(".yaml")):
            continue
        full = os.path.join(base, fname)
        try:
            configs.append(load_check_config(full))
        except (OSError, yaml.YAMLError, ConfigError) as e:
            logger.warning("Skipping check config %s: %s", fname, e)
    return configs
