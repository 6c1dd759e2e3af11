"""
Source plugin model and shared conversion types.

The Claude plugin model is produced by the loader and only ever read by
converters. Every converter returns a ConversionResult holding its
target-specific bundle together with the warnings raised along the way.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar


@dataclass(frozen=True)
class ClaudeAgent:
    name: str
    body: str = ""
    description: Optional[str] = None
    capabilities: Optional[List[str]] = None


@dataclass(frozen=True)
class ClaudeCommand:
    name: str
    body: str = ""
    description: Optional[str] = None


@dataclass(frozen=True)
class ClaudeSkill:
    """A skill directory copied to targets byte-for-byte."""
    name: str
    source_dir: Path


@dataclass(frozen=True)
class ClaudeMcpServer:
    command: Optional[str] = None
    args: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None
    # Network transports (http/sse) carry a url instead of a command
    url: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class ClaudePlugin:
    root: Path
    name: str = ""
    agents: List[ClaudeAgent] = field(default_factory=list)
    commands: List[ClaudeCommand] = field(default_factory=list)
    skills: List[ClaudeSkill] = field(default_factory=list)
    mcp_servers: Optional[Dict[str, ClaudeMcpServer]] = None
    hooks: Optional[Dict[str, Any]] = None
    instructions: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.root.name


@dataclass(frozen=True)
class ConvertOptions:
    """Per-run conversion choices shared by every target."""
    steering_name: Optional[str] = None


BundleT = TypeVar("BundleT")


@dataclass(frozen=True)
class ConversionResult(Generic[BundleT]):
    bundle: BundleT
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.warnings
