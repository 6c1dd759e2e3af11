"""Shared fixtures for tests."""

import pytest
from pathlib import Path
import json

from plugin_bridge.core.types import (
    ClaudeAgent,
    ClaudeCommand,
    ClaudeMcpServer,
    ClaudePlugin,
    ClaudeSkill,
)


@pytest.fixture
def tmp_plugin(tmp_path):
    """Create a minimal Claude Code plugin directory."""
    root = tmp_path / "compound"
    (root / ".claude-plugin").mkdir(parents=True)
    (root / "agents").mkdir()
    (root / "commands" / "workflows").mkdir(parents=True)
    (root / "skills" / "doc-writer" / "references").mkdir(parents=True)
    (root / "skills" / "plan").mkdir(parents=True)
    (root / "hooks").mkdir()

    (root / ".claude-plugin" / "plugin.json").write_text(
        json.dumps({"name": "compound-engineering", "version": "1.0.0"})
    )

    # Sample agents
    (root / "agents" / "code-reviewer.md").write_text(
        "---\n"
        "name: Code Reviewer\n"
        "capabilities: Security review, Style review\n"
        "---\n\n"
        "Review the diff. Use the Bash tool to run tests.\n"
    )
    (root / "agents" / "planner.md").write_text(
        "---\nname: planner\ndescription: Plans work\n---\n\nTask code-reviewer(check the plan)\n"
    )

    # Sample commands
    (root / "commands" / "plan.md").write_text(
        "---\ndescription: Create a plan\n---\n\nAsk @planner to use /workflows:review\n"
    )
    (root / "commands" / "workflows" / "review.md").write_text("Review using .claude/agents/ first.\n")

    # Sample skills
    (root / "skills" / "doc-writer" / "SKILL.md").write_text(
        "---\nname: doc-writer\ndescription: Writes docs\n---\n\n# Doc Writer\n"
    )
    (root / "skills" / "doc-writer" / "references" / "style.md").write_text("# Style\n")
    (root / "skills" / "plan" / "SKILL.md").write_text(
        "---\nname: plan\ndescription: Planning skill\n---\n\n# Plan\n"
    )

    # Sample MCP config: one stdio server, one HTTP server
    mcp_config = {
        "mcpServers": {
            "github": {
                "command": "npx",
                "args": ["-y", "@modelcontextprotocol/server-github"],
                "env": {"GITHUB_TOKEN": "xxx"},
            },
            "docs": {"type": "http", "url": "https://example.com/mcp"},
        }
    }
    (root / ".mcp.json").write_text(json.dumps(mcp_config, indent=2))

    hooks = {
        "hooks": {
            "PreToolUse": [{"matcher": "Bash", "hooks": [{"type": "command", "command": "echo hi"}]}]
        }
    }
    (root / "hooks" / "hooks.json").write_text(json.dumps(hooks))

    (root / "CLAUDE.md").write_text("# Guidelines\n\nStore notes in .claude/notes/.\n")

    return root


@pytest.fixture
def skill_source(tmp_path):
    """A pass-through skill directory outside any output tree."""
    skill_dir = tmp_path / "source-skills" / "doc-writer"
    skill_dir.mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("---\nname: doc-writer\ndescription: Writes docs\n---\n\n# Doc Writer\n")
    return skill_dir


@pytest.fixture
def sample_plugin(tmp_path, skill_source):
    """An in-memory plugin covering every record kind."""
    return ClaudePlugin(
        root=tmp_path,
        name="Sample Plugin",
        agents=[
            ClaudeAgent(name="Code Reviewer", body="Review code. Ask @planner when unsure."),
            ClaudeAgent(name="planner", description="Plans work", body="Task code-reviewer(check it)"),
        ],
        commands=[ClaudeCommand(name="doc-writer", description="Write docs", body="Use /doc-writer")],
        skills=[ClaudeSkill(name="doc-writer", source_dir=skill_source)],
        mcp_servers={
            "local": ClaudeMcpServer(command="npx", args=["-y", "server"], env={"TOKEN": "abc"}),
            "remote": ClaudeMcpServer(url="https://example.com/sse", type="sse"),
        },
        hooks=None,
        instructions="Keep settings in ~/.claude/settings.json.\n",
    )
