"""Tests for the content transformation engine."""

import pytest

from plugin_bridge.core.transform import (
    COPILOT_DIALECT,
    KIRO_DIALECT,
    TRANSFORM_PASSES,
    rewrite_agent_mentions,
    rewrite_paths,
    rewrite_slash_commands,
    rewrite_task_calls,
    rewrite_tool_names,
    transform_content,
)

SAMPLE_BODY = """## Steps
- Task code-reviewer(review @code-reviewer output in .claude/reviews)
Run /workflows:review when done.
Use the Bash tool to run tests, ask @stranger if stuck.
"""

IDEMPOTENCE_BODIES = [
    SAMPLE_BODY,
    "Task planner(draft a plan for /deploy using ~/.claude/config)",
    "  - Task a(b) then Task b(c)\n\tTask c-d(`/x` and @a)",
    "Use Read to open `.claude/agents/x.md` and the Edit tool to patch it.",
    "Mail me@planner.com or ping @planner, @planner-bot and @a.",
    "/a/b /c:d `/e` and/or https://example.com/path",
    "WebFetch tool, Grep to search, Glob tool, Write to disk, Task tool.",
    "",
]


def test_passes_run_in_documented_order():
    names = [name for name, _ in TRANSFORM_PASSES]

    assert names == ["task_calls", "paths", "slash_commands", "tool_names", "agent_mentions"]


# Pass 1: Task calls

def test_task_call_rewritten():
    result = rewrite_task_calls("Task repo-research-analyst(feature description)", KIRO_DIALECT)

    assert result == (
        "Use the use_subagent tool to delegate to the repo-research-analyst agent: feature description"
    )


def test_task_call_keeps_list_prefix():
    result = rewrite_task_calls("  - Task reviewer( check the diff )", KIRO_DIALECT)

    assert result == "  - Use the use_subagent tool to delegate to the reviewer agent: check the diff"


def test_task_call_mid_line_untouched():
    text = "Then run Task reviewer(x) again"

    assert rewrite_task_calls(text, KIRO_DIALECT) == text


def test_task_call_copilot_phrasing():
    result = rewrite_task_calls("Task reviewer(x)", COPILOT_DIALECT)

    assert result == "Use the agent tool to delegate to the reviewer agent: x"


# Pass 2: paths

def test_paths_rewritten_at_token_boundary():
    result = rewrite_paths("Open ~/.claude/settings.json and .claude/agents/x.md", KIRO_DIALECT)

    assert result == "Open ~/.kiro/settings.json and .kiro/agents/x.md"


def test_paths_rewritten_after_quotes():
    result = rewrite_paths("\"~/.claude/a\" '.claude/b' `.claude/c`", KIRO_DIALECT)

    assert result == "\"~/.kiro/a\" '.kiro/b' `.kiro/c`"


def test_paths_not_rewritten_inside_tokens():
    text = "see foo.claude/bar and my/.claude/x"

    assert rewrite_paths(text, KIRO_DIALECT) == text


def test_paths_copilot_prefixes():
    result = rewrite_paths(".claude/x ~/.claude/y", COPILOT_DIALECT)

    assert result == ".github/x ~/.copilot/y"


# Pass 3: slash commands

def test_slash_command_becomes_skill_reference():
    result = rewrite_slash_commands("Run /workflows:plan next", KIRO_DIALECT)

    assert result == "Run the workflows-plan skill next"


def test_slash_command_in_backticks():
    assert rewrite_slash_commands("Try `/deploy` now", KIRO_DIALECT) == "Try the deploy skill now"


def test_slash_command_at_line_start():
    assert rewrite_slash_commands("/Plan_Big\nnext", KIRO_DIALECT) == "the plan_big skill\nnext"


def test_slash_inside_word_untouched():
    text = "and/or https://example.com"

    assert rewrite_slash_commands(text, KIRO_DIALECT) == text


# Pass 4: tool names

@pytest.mark.parametrize(
    "text, expected",
    [
        ("Use the Bash tool to run", "Use the shell tool to run"),
        ("Use Read to open files", "Use read to open files"),
        ("the Edit tool", "the write tool"),
        ("Grep to find", "grep to find"),
        ("WebFetch tool", "web_fetch tool"),
        ("the Task tool", "the use_subagent tool"),
    ],
)
def test_tool_names_rewritten(text, expected):
    assert rewrite_tool_names(text, KIRO_DIALECT) == expected


@pytest.mark.parametrize(
    "text",
    ["Bash is a shell", "Read the docs", "Bashful tool", "Edit: fix typo", "Taskbar tool"],
)
def test_tool_names_in_prose_untouched(text):
    assert rewrite_tool_names(text, KIRO_DIALECT) == text


def test_tool_names_copilot():
    assert rewrite_tool_names("the Bash tool", COPILOT_DIALECT) == "the execute tool"


# Pass 5: agent mentions

def test_known_mention_rewritten():
    result = rewrite_agent_mentions("@reviewer please check", KIRO_DIALECT, ["reviewer"])

    assert result == "the reviewer agent please check"


def test_unknown_mention_untouched():
    text = "@unknown please check"

    assert rewrite_agent_mentions(text, KIRO_DIALECT, ["reviewer"]) == text


def test_mention_requires_full_name():
    text = "ask @reviewer-bot or mail me@reviewer.com"

    assert rewrite_agent_mentions(text, KIRO_DIALECT, ["reviewer"]) == text


def test_longest_mention_wins():
    result = rewrite_agent_mentions("@code-reviewer and @code", KIRO_DIALECT, ["code", "code-reviewer"])

    assert result == "the code-reviewer agent and the code agent"


def test_mentions_without_known_names():
    assert rewrite_agent_mentions("@reviewer", KIRO_DIALECT, []) == "@reviewer"


# Full pipeline

def test_transform_full_composition():
    result = transform_content(SAMPLE_BODY, ["code-reviewer"])

    assert result == (
        "## Steps\n"
        "- Use the use_subagent tool to delegate to the code-reviewer agent: "
        "review the code-reviewer agent output in .kiro/reviews\n"
        "Run the workflows-review skill when done.\n"
        "Use the shell tool to run tests, ask @stranger if stuck.\n"
    )


@pytest.mark.parametrize("body", IDEMPOTENCE_BODIES)
@pytest.mark.parametrize("dialect", [KIRO_DIALECT, COPILOT_DIALECT])
def test_transform_is_idempotent(body, dialect):
    peers = ["code-reviewer", "planner", "a", "c-d"]
    once = transform_content(body, peers, dialect)

    assert transform_content(once, peers, dialect) == once
