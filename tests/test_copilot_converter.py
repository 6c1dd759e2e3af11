"""Tests for GitHub Copilot converter."""

from pathlib import Path

from plugin_bridge.converters.copilot import (
    COPILOT_AGENT_TOOLS,
    COPILOT_PROMPT_MAX_CHARS,
    convert_claude_to_copilot,
)
from plugin_bridge.core.types import ClaudeAgent, ClaudePlugin
from plugin_bridge.utils import extract_yaml_frontmatter


def test_agent_has_frontmatter(sample_plugin):
    """Verify name, description and tools are in the agent frontmatter."""
    agent = convert_claude_to_copilot(sample_plugin).bundle.agents[0]

    frontmatter, body = extract_yaml_frontmatter(agent.content)

    assert agent.name == "code-reviewer"
    assert frontmatter["name"] == "code-reviewer"
    assert frontmatter["description"] == "Use this agent for Code Reviewer tasks"
    assert frontmatter["tools"] == COPILOT_AGENT_TOOLS
    assert body == "Review code. Ask the planner agent when unsure."


def test_agent_uses_copilot_delegation(sample_plugin):
    agent = convert_claude_to_copilot(sample_plugin).bundle.agents[1]

    _, body = extract_yaml_frontmatter(agent.content)

    assert body == "Use the agent tool to delegate to the code-reviewer agent: check it"


def test_long_prompt_is_truncated_with_warning():
    plugin = ClaudePlugin(root=Path("/tmp/p"), agents=[ClaudeAgent(name="big", body="x" * 40000)])

    result = convert_claude_to_copilot(plugin)
    _, body = extract_yaml_frontmatter(result.bundle.agents[0].content)

    assert len(body) == COPILOT_PROMPT_MAX_CHARS
    assert body.endswith("(truncated to fit Copilot 30K char limit)")
    assert len(result.warnings) == 1


def test_instructions_apply_to_all_files(sample_plugin):
    """Verify CLAUDE.md becomes an always-on instruction file."""
    instructions = convert_claude_to_copilot(sample_plugin).bundle.instructions

    assert len(instructions) == 1
    frontmatter, body = extract_yaml_frontmatter(instructions[0].content)
    assert instructions[0].name == "sample-plugin"
    assert frontmatter == {"applyTo": "**"}
    assert body == "Keep settings in ~/.copilot/settings.json.\n"


def test_commands_and_skills_share_namespace(sample_plugin):
    bundle = convert_claude_to_copilot(sample_plugin).bundle

    assert [s.name for s in bundle.skill_dirs] == ["doc-writer"]
    assert [s.name for s in bundle.generated_skills] == ["doc-writer-2"]


def test_remote_mcp_skipped(sample_plugin):
    result = convert_claude_to_copilot(sample_plugin)

    assert list(result.bundle.mcp_servers) == ["local"]
    assert result.warnings == (
        'MCP server "remote" has no command (HTTP/SSE transport). Copilot only supports stdio. Skipping.',
    )


def test_hooks_produce_warning():
    plugin = ClaudePlugin(root=Path("/tmp/p"), hooks={"Stop": []})

    result = convert_claude_to_copilot(plugin)

    assert result.warnings == (
        "GitHub Copilot has no equivalent for Claude Code hooks. Hooks were skipped during conversion.",
    )


def test_agents_normalizing_alike_get_distinct_names():
    plugin = ClaudePlugin(
        root=Path("/tmp/p"),
        agents=[ClaudeAgent(name="Code Reviewer", body="first"), ClaudeAgent(name="code-reviewer", body="second")],
    )

    agents = convert_claude_to_copilot(plugin).bundle.agents

    assert [a.name for a in agents] == ["code-reviewer", "code-reviewer-2"]
    frontmatter, body = extract_yaml_frontmatter(agents[1].content)
    assert frontmatter["name"] == "code-reviewer-2"
    assert body == "second"
