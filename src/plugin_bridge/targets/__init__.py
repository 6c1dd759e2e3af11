"""
Target registry.

Static mapping from target name to its convert/write pair. Adding a target
means adding one entry to TARGETS.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from plugin_bridge.converters.copilot import convert_claude_to_copilot
from plugin_bridge.converters.kiro import convert_claude_to_kiro
from plugin_bridge.core.types import ClaudePlugin, ConversionResult, ConvertOptions
from plugin_bridge.targets.copilot import write_copilot_bundle
from plugin_bridge.targets.kiro import write_kiro_bundle


@dataclass(frozen=True)
class TargetHandler:
    name: str
    display_name: str
    output_dir: str
    convert: Callable[[ClaudePlugin, Optional[ConvertOptions]], ConversionResult[Any]]
    write: Callable[[Path, Any], List[str]]


TARGETS: Dict[str, TargetHandler] = {
    "kiro": TargetHandler(
        name="kiro",
        display_name="Kiro CLI",
        output_dir=".kiro",
        convert=convert_claude_to_kiro,
        write=write_kiro_bundle,
    ),
    "copilot": TargetHandler(
        name="copilot",
        display_name="GitHub Copilot",
        output_dir=".github",
        convert=convert_claude_to_copilot,
        write=write_copilot_bundle,
    ),
}


def get_target(name: str) -> Optional[TargetHandler]:
    """Case-insensitive lookup; None for unknown targets."""
    return TARGETS.get(name.strip().lower())


def target_names() -> List[str]:
    return list(TARGETS)


def all_targets() -> List[TargetHandler]:
    return list(TARGETS.values())


__all__ = ["TARGETS", "TargetHandler", "get_target", "target_names", "all_targets"]
