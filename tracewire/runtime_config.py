"""Runtime configuration state management."""

# Global runtime configuration state
_config = {
    "strict_flag_conversion": False,
    "debug": False,
}


def set_strict_flag_conversion(value: bool) -> None:
    _config["strict_flag_conversion"] = value


def get_strict_flag_conversion() -> bool:
    return _config["strict_flag_conversion"]


def set_debug(value: bool) -> None:
    _config["debug"] = value


def get_debug() -> bool:
    return _config["debug"]
