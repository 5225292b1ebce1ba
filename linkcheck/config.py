import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
    raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except Exception:
        logging.exception("Invalid %s: %r", name, raw)
        return default


def get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except Exception:
        logging.exception("Invalid %s: %r", name, raw)
        return default


def get_optional_float_env(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except Exception:
        logging.exception("Invalid %s: %r", name, raw)
        return None


USER_AGENT = get_str_env("LINKCHECK_USER_AGENT", "linkchecker")
HTTP_TIMEOUT = get_float_env("LINKCHECK_HTTP_TIMEOUT", 10.0)
DEFAULT_SPEED = get_str_env("LINKCHECK_SPEED", "normal")
BUFFER_SIZE = get_int_env("LINKCHECK_BUFFER_SIZE", 2000)
RATE_WAIT_TIMEOUT = get_optional_float_env("LINKCHECK_RATE_WAIT_TIMEOUT")
