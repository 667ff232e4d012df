"""Shared test fixtures for chathub."""

import json
from datetime import datetime, timezone

import pytest

from chathub.core import Agent, CustomAgentModel, LlmModel, N8nModel, Session

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_agent(name="Agent", model=None, updated_at="2024-01-15T12:00:00Z", **kwargs) -> Agent:
    return Agent(
        name=name,
        model=model or LlmModel(provider="openai", model="gpt-4"),
        updated_at=_dt(updated_at),
        **kwargs,
    )


def make_session(id="session-1", title="Test Chat", updated_at="2024-01-15T10:00:00Z", **kwargs) -> Session:
    if "last_message_at" in kwargs:
        kwargs["last_message_at"] = _dt(kwargs["last_message_at"])
    return Session(id=id, title=title, updated_at=_dt(updated_at), **kwargs)


def _dt(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def sample_agents():
    return [
        make_agent(
            name="GPT-4 Agent",
            model=LlmModel(provider="openai", model="gpt-4"),
            updated_at="2024-01-15T12:00:00Z",
        ),
        make_agent(
            name="Claude Agent",
            model=LlmModel(provider="anthropic", model="claude"),
            updated_at="2024-01-14T12:00:00Z",
        ),
        make_agent(
            name="Custom Bot",
            model=CustomAgentModel(agent_id="agent-1"),
            updated_at="2024-01-13T12:00:00Z",
        ),
        make_agent(
            name="Support Workflow",
            model=N8nModel(workflow_id="wf-1"),
            updated_at="2024-01-12T12:00:00Z",
        ),
    ]


@pytest.fixture
def chat_data():
    """Raw chat data the way the chat API returns it."""
    return {
        "sessions": [
            {
                "id": "session-1",
                "title": "Fix auth bug",
                "ownerId": "user-123",
                "createdAt": "2024-01-15T09:00:00Z",
                "updatedAt": "2024-01-15T10:00:00Z",
                "lastMessageAt": "2024-01-15T10:00:00Z",
                "provider": "openai",
                "model": "gpt-4",
                "workflowId": None,
                "agentId": None,
            },
            {
                "id": "session-2",
                "title": "Plan the release",
                "updatedAt": "2024-01-14T08:00:00Z",
                "provider": "n8n",
                "model": None,
                "workflowId": "wf-1",
                "agentId": None,
            },
            {
                "id": "session-3",
                "title": "Old chat",
                "updatedAt": "2024-01-01T08:00:00Z",
                "provider": None,
            },
            {"title": "No id, skipped"},
        ],
        "models": {
            "anthropic": {
                "models": [
                    {
                        "name": "Claude",
                        "model": {"provider": "anthropic", "model": "claude-3"},
                        "updatedAt": "2024-01-10T12:00:00Z",
                    },
                ],
            },
            "openai": {
                "models": [
                    {
                        "name": "GPT-4",
                        "model": {"provider": "openai", "model": "gpt-4"},
                        "description": "General purpose",
                        "updatedAt": "2024-01-14T12:00:00Z",
                        "icon": "openai",
                    },
                    {"name": "Broken", "model": {"provider": "openai"}},
                ],
            },
            "n8n": {
                "models": [
                    {
                        "name": "Support Workflow",
                        "model": {"provider": "n8n", "workflowId": "wf-1"},
                        "updatedAt": "2024-01-15T12:00:00Z",
                    },
                ],
            },
            "custom-agent": {"models": []},
        },
    }


@pytest.fixture
def data_file(tmp_path, chat_data):
    path = tmp_path / "chat.json"
    path.write_text(json.dumps(chat_data), encoding="utf-8")
    return path
