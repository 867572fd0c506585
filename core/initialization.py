"""
core/initialization.py
----------------------
Loads configuration from .env, normalizes symbol/handle lists, and wires all
runtime components with simple dependency-injection (DI) overrides.
"""

from __future__ import annotations

import os
import logging
from typing import Dict, List, Optional

from dotenv import load_dotenv

from core.desk import SignalDesk
from models.handle import DEFAULT_HANDLES, DEFAULT_SYMBOLS, active_labels
from notifiers.hub import NotifierHub
from notifiers.log_notifier import LogNotifier
from utils.logger import setup_logger

_TRUTHY = {"1", "true", "yes", "on"}


def _split(raw: str) -> List[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


def _normalize_symbol(sym: str) -> str:
    sym = sym.upper()
    return sym if sym.startswith("$") else f"${sym}"


def _normalize_handle(handle: str) -> str:
    return handle if handle.startswith("@") else f"@{handle}"


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def load_configuration(env_path: str = "config.env") -> Dict:
    """
    Load settings from an .env-style file and return a structured config dict.
    """
    log = logging.getLogger(__name__)
    load_dotenv(dotenv_path=env_path)

    symbols = [_normalize_symbol(s) for s in _split(os.getenv("SYMBOLS", ""))]
    handles = [_normalize_handle(h) for h in _split(os.getenv("ACTIVE_HANDLES", ""))]
    seed_raw = os.getenv("RANDOM_SEED", "").strip()

    conf: Dict[str, object] = {
        "SYMBOLS": symbols or list(DEFAULT_SYMBOLS),
        "ACTIVE_HANDLES": handles or active_labels(DEFAULT_HANDLES),
        "SCAN_INTERVAL_MIN": float(os.getenv("SCAN_INTERVAL_MIN", "5")),
        "SCAN_INTERVAL_MAX": float(os.getenv("SCAN_INTERVAL_MAX", "10")),
        "ANALYSIS_DELAY": float(os.getenv("ANALYSIS_DELAY", "2")),
        "AUTO_TRADE_DELAY": float(os.getenv("AUTO_TRADE_DELAY", "1")),
        "AUTO_TRADE_THRESHOLD": int(os.getenv("AUTO_TRADE_THRESHOLD", "85")),
        "AUTO_TRADE_ENABLED": _flag("AUTO_TRADE_ENABLED", True),
        "MAX_DETECTIONS": int(os.getenv("MAX_DETECTIONS", "10")),
        "MAX_TRADES": int(os.getenv("MAX_TRADES", "20")),
        "MAX_ACTIVITY": int(os.getenv("MAX_ACTIVITY", "50")),
        "RANDOM_SEED": int(seed_raw) if seed_raw else None,
        "SCAN_ON_START": _flag("SCAN_ON_START", True),
        "RUN_SECONDS": float(os.getenv("RUN_SECONDS", "0") or 0),
    }

    log.debug("Parsed SYMBOLS: %s", conf["SYMBOLS"])
    log.debug("Parsed ACTIVE_HANDLES: %s", conf["ACTIVE_HANDLES"])

    return conf


def initialize_components(
    config: Dict,
    overrides: Optional[Dict[str, object]] = None,
    logger: Optional[logging.Logger] = None,
    ) -> Dict[str, object]:
    """
    Construct and wire together all runtime components (supports DI via overrides).

    Keys you can override:
    {"logger", "rng", "scheduler", "bus", "clock", "notifier_hub"}
    """
    overrides = overrides or {}

    # 1) Logger
    logger = overrides.get("logger") or logger or setup_logger(__name__)

    # 2) Desk – only forward the collaborators that were actually supplied
    desk_kwargs = {
        key: overrides[key]
        for key in ("rng", "scheduler", "bus", "clock")
        if overrides.get(key) is not None
    }
    desk = SignalDesk(config, logger=logger, **desk_kwargs)

    # 3) Activity feed fan-out
    hub = overrides.get("notifier_hub")
    if hub is None:
        hub = NotifierHub([LogNotifier(logger)])
    hub.attach(desk.bus)

    logger.info("✅ Logger initialized.")
    logger.info("✅ SignalDesk initialized (auto-trade >= %s%%).", desk.supervisor.threshold)
    logger.info("✅ NotifierHub initialized with %d backend(s).", len(hub.backends))

    return {
        "logger": logger,
        "desk": desk,
        "notifier_hub": hub,
    }
