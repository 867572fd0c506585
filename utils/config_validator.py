def validate_config(config: dict):
    required_keys = [
        "SYMBOLS",
        "SCAN_INTERVAL_MIN",
        "SCAN_INTERVAL_MAX",
        "ANALYSIS_DELAY",
        "AUTO_TRADE_DELAY",
        "AUTO_TRADE_THRESHOLD",
    ]

    missing = [k for k in required_keys if k not in config or config[k] is None]
    if missing:
        raise ValueError(f"Missing required configuration keys: {missing}")

    if not isinstance(config["SYMBOLS"], list) or not config["SYMBOLS"]:
        raise TypeError("SYMBOLS must be a non-empty list.")

    if not isinstance(config.get("ACTIVE_HANDLES", []), list):
        raise TypeError("ACTIVE_HANDLES must be a list.")

    for key in ("SCAN_INTERVAL_MIN", "SCAN_INTERVAL_MAX", "ANALYSIS_DELAY", "AUTO_TRADE_DELAY"):
        if not isinstance(config[key], (int, float)) or config[key] < 0:
            raise ValueError(f"{key} must be a non-negative number.")

    if config["SCAN_INTERVAL_MIN"] > config["SCAN_INTERVAL_MAX"]:
        raise ValueError("SCAN_INTERVAL_MIN must not exceed SCAN_INTERVAL_MAX.")

    if not 0 <= int(config["AUTO_TRADE_THRESHOLD"]) <= 100:
        raise ValueError("AUTO_TRADE_THRESHOLD must be within 0..100.")

    for key in ("MAX_DETECTIONS", "MAX_TRADES", "MAX_ACTIVITY"):
        if key in config and (not isinstance(config[key], int) or config[key] <= 0):
            raise ValueError(f"{key} must be a positive integer.")
