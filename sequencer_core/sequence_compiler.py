from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence as SequenceOf

from .channel_lists import ChannelList, ChannelListRegistry
from .frame_models import Sequence
from .frame_script import comment_text, generate_frame_script
from .subroutine_emitter import generate_frame_subroutine

logger = logging.getLogger(__name__)

FALLBACK_SUBROUTINE_NAME = "sequence"


@dataclass(frozen=True)
class CompiledScript:
    sequence_name: str
    script: str
    channel_lists: List[ChannelList] = field(default_factory=list)
    subroutine_names: List[str] = field(default_factory=list)
    frame_count: int = 0


def sanitize_subroutine_name(name: str) -> str:
    nice = re.sub(r"\s+", "_", str(name))
    nice = re.sub(r"[^A-Za-z0-9_]", "", nice)
    return nice or FALLBACK_SUBROUTINE_NAME


def _looped_script(
    sequence: Sequence,
    enabled_channels: SequenceOf[int],
    registry: ChannelListRegistry,
    targets_per_line: Optional[int],
) -> str:
    script = f"# {comment_text(sequence.name)}\nbegin\n"
    script += generate_frame_script(sequence.frames, enabled_channels, registry, targets_per_line=targets_per_line)
    script += "repeat\n\n"

    for channels in registry:
        script += generate_frame_subroutine(channels) + "\n"
    return script


def generate_looped_script(
    sequence: Sequence,
    enabled_channels: SequenceOf[int],
    *,
    targets_per_line: Optional[int] = None,
) -> str:
    return _looped_script(sequence, enabled_channels, ChannelListRegistry(), targets_per_line)


def generate_sequence_subroutine(
    sequence: Sequence,
    enabled_channels: SequenceOf[int],
    registry: ChannelListRegistry,
    *,
    targets_per_line: Optional[int] = None,
) -> str:
    script = f"# {comment_text(sequence.name)}\nsub {sanitize_subroutine_name(sequence.name)}\n"
    script += generate_frame_script(sequence.frames, enabled_channels, registry, targets_per_line=targets_per_line)
    script += "  return\n"
    return script


def generate_subroutine_list(
    sequences: Iterable[Sequence],
    enabled_channels: SequenceOf[int],
    *,
    targets_per_line: Optional[int] = None,
) -> str:
    program_registry = ChannelListRegistry()
    script = ""

    for sequence in sequences:
        registry = ChannelListRegistry()
        script += generate_sequence_subroutine(sequence, enabled_channels, registry, targets_per_line=targets_per_line)
        program_registry.merge(registry)

    for channels in program_registry:
        script += "\n" + generate_frame_subroutine(channels)

    logger.debug("assembled program with %d frame subroutines", len(program_registry))
    return script


def compile_sequence(
    sequence: Sequence,
    enabled_channels: SequenceOf[int],
    *,
    targets_per_line: Optional[int] = None,
) -> CompiledScript:
    registry = ChannelListRegistry()
    script = _looped_script(sequence, enabled_channels, registry, targets_per_line)
    return CompiledScript(
        sequence_name=sequence.name,
        script=script,
        channel_lists=registry.lists,
        subroutine_names=registry.subroutine_names(),
        frame_count=len(sequence.frames),
    )
