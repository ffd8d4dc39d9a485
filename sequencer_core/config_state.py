from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .math_utils import clamp_int

logger = logging.getLogger(__name__)

DEFAULT_SERVO_COUNT = 6
MAX_SERVO_COUNT = 24

VALID_CHANNEL_MODES = {"servo", "servo_multiplied", "output", "input"}
SERVO_MODES = {"servo", "servo_multiplied"}


@dataclass(frozen=True)
class ChannelConfigView:
    servo_count: int
    channel_names: Dict[int, str]
    channel_modes: Dict[int, str]
    enabled_channels: List[int]


def _coerce_int(v: Any, fallback: int) -> int:
    try:
        return int(v)
    except Exception:
        return int(fallback)


def channel_mode_from_config_item(item: Mapping[str, Any]) -> str:
    mode = str(item.get("mode", "servo")).strip().lower().replace(" ", "_")
    if mode not in VALID_CHANNEL_MODES:
        logger.warning("unknown channel mode %r, treating as servo", mode)
        return "servo"
    return mode


def build_channel_config_view(cfg: Mapping[str, Any]) -> ChannelConfigView:
    servo_count = clamp_int(_coerce_int(cfg.get("servo_count", DEFAULT_SERVO_COUNT), DEFAULT_SERVO_COUNT), 1, MAX_SERVO_COUNT)
    items = cfg.get("channels", []) if isinstance(cfg.get("channels", []), list) else []

    names: Dict[int, str] = {}
    modes: Dict[int, str] = {}
    for ch in range(servo_count):
        item = items[ch] if ch < len(items) and isinstance(items[ch], dict) else {}
        names[ch] = str(item.get("name", "") or f"Channel {ch}")
        modes[ch] = channel_mode_from_config_item(item)

    if len(items) > servo_count:
        logger.warning("config lists %d channels but servo_count is %d; extras ignored", len(items), servo_count)

    enabled = [ch for ch in range(servo_count) if modes[ch] in SERVO_MODES]
    return ChannelConfigView(
        servo_count=servo_count,
        channel_names=names,
        channel_modes=modes,
        enabled_channels=enabled,
    )


def enabled_channels_from_config(cfg: Mapping[str, Any]) -> List[int]:
    return build_channel_config_view(cfg).enabled_channels
