from .channel_lists import ChannelList, ChannelListRegistry, frame_subroutine_name, same_channel_list
from .config_state import ChannelConfigView, build_channel_config_view, enabled_channels_from_config
from .frame_models import DEFAULT_CLIPBOARD_DURATION_MS, MAX_FRAME_NAME_LEN, Frame, Sequence
from .frame_script import generate_frame_script, needed_channels_for_frames
from .math_utils import U16_MAX, clamp_int, coerce_u16, parse_u16
from .sequence_compiler import (
    CompiledScript,
    compile_sequence,
    generate_looped_script,
    generate_sequence_subroutine,
    generate_subroutine_list,
    sanitize_subroutine_name,
)
from .sequence_validate import normalize_and_validate_frame, normalize_and_validate_sequence
from .subroutine_emitter import SET_TARGET_INSTRUCTION, generate_frame_subroutine

__all__ = [
    "ChannelConfigView",
    "ChannelList",
    "ChannelListRegistry",
    "CompiledScript",
    "DEFAULT_CLIPBOARD_DURATION_MS",
    "Frame",
    "MAX_FRAME_NAME_LEN",
    "SET_TARGET_INSTRUCTION",
    "Sequence",
    "U16_MAX",
    "build_channel_config_view",
    "clamp_int",
    "coerce_u16",
    "compile_sequence",
    "enabled_channels_from_config",
    "frame_subroutine_name",
    "generate_frame_script",
    "generate_frame_subroutine",
    "generate_looped_script",
    "generate_sequence_subroutine",
    "generate_subroutine_list",
    "needed_channels_for_frames",
    "normalize_and_validate_frame",
    "normalize_and_validate_sequence",
    "parse_u16",
    "same_channel_list",
    "sanitize_subroutine_name",
]
