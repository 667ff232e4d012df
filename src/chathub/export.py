"""Export normalized chat data as JSON-ready dicts using the API's camelCase keys."""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any, Optional

from .codec import flatten_model, stringify_model
from .core import Agent, AgentRoute, AiMessage, FlatModel, ModelSelector, RelativeDateGroup, Session


def model_to_dict(selector: Optional[ModelSelector]) -> Optional[dict]:
    """Return the selector with only its meaningful identifier, e.g. {"provider": "n8n", "workflowId": "wf-1"}."""
    if selector is None:
        return None
    flat = flatten_model(selector)
    return {k: v for k, v in flat_model_to_dict(flat).items() if v is not None}


def flat_model_to_dict(flat: FlatModel) -> dict:
    return {
        "provider": flat.provider,
        "model": flat.model,
        "workflowId": flat.workflow_id,
        "agentId": flat.agent_id,
    }


def agent_to_dict(agent: Agent) -> dict:
    return {
        "name": agent.name,
        "model": model_to_dict(agent.model),
        "token": stringify_model(agent.model),
        "description": agent.description,
        "createdAt": _isoformat(agent.created_at),
        "updatedAt": _isoformat(agent.updated_at),
    }


def session_to_dict(session: Session) -> dict:
    data = {
        "id": session.id,
        "title": session.title,
        "ownerId": session.owner_id,
        "createdAt": _isoformat(session.created_at),
        "updatedAt": _isoformat(session.updated_at),
        "lastMessageAt": _isoformat(session.last_message_at),
    }
    data.update(flat_model_to_dict(flatten_model(session.model) if session.model else FlatModel()))
    return data


def groups_to_dict(groups: list[RelativeDateGroup]) -> list[dict]:
    return [
        {"group": g.group, "sessions": [session_to_dict(s) for s in g.sessions]}
        for g in groups
    ]


def route_to_dict(route: AgentRoute) -> dict:
    data: dict[str, Any] = {"name": route.name}
    if route.query is not None:
        data["query"] = dict(route.query)
    return data


def message_to_dict(message: AiMessage) -> dict:
    camel = {
        "session_id": "sessionId",
        "execution_id": "executionId",
        "previous_message_id": "previousMessageId",
        "retry_of_message_id": "retryOfMessageId",
        "workflow_id": "workflowId",
        "agent_id": "agentId",
    }
    return {camel.get(k, k): v for k, v in asdict(message).items()}


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
