"""
Content transformation engine.

Rewrites Claude Code prose for another assistant. The rewrite is an explicit,
ordered pipeline of pure passes (TRANSFORM_PASSES):

1. Task agent calls:  Task agent-name(args) -> Use the <tool> tool to delegate ...
2. Path rewriting:    ~/.claude/ and .claude/ -> target prefixes
3. Slash commands:    /workflows:plan -> the workflows-plan skill
4. Tool names:        Bash tool -> shell tool (only before " tool" / " to ")
5. Agent mentions:    @agent-name -> the agent-name agent (known agents only)

No pass produces text that an earlier pass would match again, so running
the pipeline twice gives the same result as running it once.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, Mapping, Pattern, Sequence, Tuple

from plugin_bridge.core.naming import (
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MAX_NAME_LENGTH,
    normalize_name,
)


# =============================================================================
# TARGET DIALECTS
# =============================================================================


@dataclass(frozen=True)
class Dialect:
    """Per-target constants used while rewriting content."""
    name: str
    home_prefix: str
    project_prefix: str
    delegate_tool: str
    tool_map: Mapping[str, str] = field(default_factory=dict)
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH


# Ref: https://kiro.dev/docs/cli/reference/built-in-tools
CLAUDE_TO_KIRO_TOOLS: Dict[str, str] = {
    "Bash": "shell",
    "Write": "write",
    "Read": "read",
    "Edit": "write",  # Kiro write is full-file, not a surgical edit. Lossy.
    "Glob": "glob",
    "Grep": "grep",
    "WebFetch": "web_fetch",
    "Task": "use_subagent",
}

# VS Code Copilot tool sets
# Ref: https://code.visualstudio.com/docs/copilot/agents/agent-tools
CLAUDE_TO_COPILOT_TOOLS: Dict[str, str] = {
    "Bash": "execute",
    "Write": "edit",
    "Read": "read",
    "Edit": "edit",
    "Glob": "search",
    "Grep": "search",
    "WebFetch": "web/fetch",
    "Task": "agent",
}

KIRO_DIALECT = Dialect(
    name="kiro",
    home_prefix="~/.kiro/",
    project_prefix=".kiro/",
    delegate_tool="use_subagent",
    tool_map=CLAUDE_TO_KIRO_TOOLS,
)

COPILOT_DIALECT = Dialect(
    name="copilot",
    home_prefix="~/.copilot/",
    project_prefix=".github/",
    delegate_tool="agent",
    tool_map=CLAUDE_TO_COPILOT_TOOLS,
)


# =============================================================================
# REWRITE PASSES
# =============================================================================

_RE_TASK_CALL = re.compile(r"^(\s*-?\s*)Task\s+([a-z][a-z0-9-]*)\(([^)]+)\)", re.MULTILINE)
# Token boundary: start of line, whitespace, or an opening quote/backtick
_RE_HOME_PATH = re.compile(r"(?:^|(?<=[\s\"'`]))~/\.claude/", re.MULTILINE)
_RE_PROJECT_PATH = re.compile(r"(?:^|(?<=[\s\"'`]))\.claude/", re.MULTILINE)
_RE_SLASH_REF = re.compile(r"(?:^|(?<=\s))`?/([a-zA-Z][a-zA-Z0-9_:-]*)`?", re.MULTILINE)


@lru_cache(maxsize=None)
def _tool_pattern(tool: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(tool)}\b(?=\s+tool|\s+to\s)")


@lru_cache(maxsize=None)
def _agent_ref_pattern(names: Tuple[str, ...]) -> Pattern[str]:
    # Longest first so "code-reviewer" wins over "code"
    ordered = sorted(names, key=lambda n: (-len(n), n))
    alternatives = "|".join(re.escape(n) for n in ordered)
    return re.compile(rf"(?<![\w@])@({alternatives})(?![\w-])")


def rewrite_task_calls(text: str, dialect: Dialect, known_agent_names: Sequence[str] = ()) -> str:
    def _replace(match: "re.Match[str]") -> str:
        prefix, agent_name, args = match.groups()
        agent = normalize_name(agent_name, dialect.max_name_length)
        return (
            f"{prefix}Use the {dialect.delegate_tool} tool to delegate to the "
            f"{agent} agent: {args.strip()}"
        )

    return _RE_TASK_CALL.sub(_replace, text)


def rewrite_paths(text: str, dialect: Dialect, known_agent_names: Sequence[str] = ()) -> str:
    text = _RE_HOME_PATH.sub(dialect.home_prefix, text)
    return _RE_PROJECT_PATH.sub(dialect.project_prefix, text)


def rewrite_slash_commands(text: str, dialect: Dialect, known_agent_names: Sequence[str] = ()) -> str:
    def _replace(match: "re.Match[str]") -> str:
        skill = normalize_name(match.group(1), dialect.max_name_length)
        return f"the {skill} skill"

    return _RE_SLASH_REF.sub(_replace, text)


def rewrite_tool_names(text: str, dialect: Dialect, known_agent_names: Sequence[str] = ()) -> str:
    for source_tool, target_tool in dialect.tool_map.items():
        text = _tool_pattern(source_tool).sub(target_tool, text)
    return text


def rewrite_agent_mentions(text: str, dialect: Dialect, known_agent_names: Sequence[str] = ()) -> str:
    names = tuple(sorted({n for n in known_agent_names if n}))
    if not names:
        return text

    def _replace(match: "re.Match[str]") -> str:
        return f"the {normalize_name(match.group(1), dialect.max_name_length)} agent"

    return _agent_ref_pattern(names).sub(_replace, text)


TransformPass = Callable[[str, Dialect, Sequence[str]], str]

# Order is part of the output contract. Mentions must run last: delegate
# arguments are copied verbatim and may themselves contain @mentions.
TRANSFORM_PASSES: Tuple[Tuple[str, TransformPass], ...] = (
    ("task_calls", rewrite_task_calls),
    ("paths", rewrite_paths),
    ("slash_commands", rewrite_slash_commands),
    ("tool_names", rewrite_tool_names),
    ("agent_mentions", rewrite_agent_mentions),
)


def transform_content(
    body: str,
    known_agent_names: Sequence[str] = (),
    dialect: Dialect = KIRO_DIALECT,
) -> str:
    """Run every rewrite pass over body, in order."""
    result = body
    for _name, rewrite in TRANSFORM_PASSES:
        result = rewrite(result, dialect, known_agent_names)
    return result
