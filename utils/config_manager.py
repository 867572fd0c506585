from typing import Any, Dict, List, Tuple

from models.handle import DEFAULT_HANDLES, DEFAULT_SYMBOLS, active_labels


class ConfigManager:
    """Typed read access to the desk settings with the stock defaults."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def get_symbols(self) -> List[str]:
        return list(self.config.get("SYMBOLS") or DEFAULT_SYMBOLS)

    def get_active_handles(self) -> List[str]:
        return list(self.config.get("ACTIVE_HANDLES") or active_labels(DEFAULT_HANDLES))

    def get_scan_interval(self) -> Tuple[float, float]:
        return (
            float(self.config.get("SCAN_INTERVAL_MIN", 5.0)),
            float(self.config.get("SCAN_INTERVAL_MAX", 10.0)),
        )

    def get_analysis_delay(self) -> float:
        return float(self.config.get("ANALYSIS_DELAY", 2.0))

    def get_auto_trade_delay(self) -> float:
        return float(self.config.get("AUTO_TRADE_DELAY", 1.0))

    def get_auto_trade_threshold(self) -> int:
        return int(self.config.get("AUTO_TRADE_THRESHOLD", 85))

    def is_auto_trade_enabled(self) -> bool:
        return bool(self.config.get("AUTO_TRADE_ENABLED", True))

    def get_max_detections(self) -> int:
        return int(self.config.get("MAX_DETECTIONS", 10))

    def get_max_trades(self) -> int:
        return int(self.config.get("MAX_TRADES", 20))

    def get_max_activity(self) -> int:
        return int(self.config.get("MAX_ACTIVITY", 50))

    def get_seed(self):
        return self.config.get("RANDOM_SEED")

    def scan_on_start(self) -> bool:
        return bool(self.config.get("SCAN_ON_START", True))

    def get_run_seconds(self) -> float:
        return float(self.config.get("RUN_SECONDS", 0) or 0)
