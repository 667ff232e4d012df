"""JSON file chat data source.

Reads a single JSON document shaped like the chat API responses:

    {
        "sessions": [
            {"id": "...", "title": "...", "updatedAt": "2024-01-15T10:00:00Z",
             "lastMessageAt": "...", "provider": "openai", "model": "gpt-4"}
        ],
        "models": {
            "openai": {"models": [
                {"name": "GPT-4", "model": {"provider": "openai", "model": "gpt-4"},
                 "updatedAt": "..."}
            ]},
            "n8n": {"models": [...]},
            "custom-agent": {"models": [...]}
        }
    }

Records use the API's camelCase keys. A record that cannot be interpreted is
skipped with a warning; the rest of the file is still used.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..codec import empty_chat_models_response, unflatten_model
from ..config import get_data_path
from ..core import Agent, ChatModelsResponse, FlatModel, ModelSelector, ProviderModels, Session
from ..source import ChatDataSource
from ..timestamps import parse_timestamp

logger = logging.getLogger(__name__)


class JsonFileSource(ChatDataSource):
    """Source backed by a JSON file on disk."""

    name = "json_file"

    def __init__(self, path: Path | None = None):
        self._path = path

    def get_path(self) -> Path:
        return self._path if self._path is not None else get_data_path()

    def is_available(self) -> bool:
        return self.get_path().is_file()

    def list_sessions(self) -> list[Session]:
        data = self._read()
        raw_sessions = data.get("sessions")
        if not isinstance(raw_sessions, list):
            return []

        sessions = []
        for entry in raw_sessions:
            try:
                sessions.append(session_from_dict(entry))
            except ValueError as e:
                logger.warning("Skipping session record in %s: %s", self.get_path(), e)
        return sessions

    def get_models(self) -> ChatModelsResponse:
        data = self._read()
        raw_models = data.get("models")
        if not isinstance(raw_models, dict):
            return empty_chat_models_response()
        return models_response_from_dict(raw_models, source=str(self.get_path()))

    # ── Private helpers ──────────────────────────────────────────────

    def _read(self) -> dict:
        path = self.get_path()
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Expected a JSON object in %s", path)
            return {}
        return data


# ── Record conversion ────────────────────────────────────────────────


def model_from_dict(raw: Any) -> ModelSelector:
    """Convert a raw selector such as {"provider": "n8n", "workflowId": "wf-1"}."""
    if not isinstance(raw, dict):
        raise ValueError(f"model must be an object, got {type(raw).__name__}")

    selector = unflatten_model(_flat_model_from_dict(raw))
    if selector is None:
        raise ValueError(f"incomplete model {raw!r}")
    return selector


def agent_from_dict(raw: Any) -> Agent:
    if not isinstance(raw, dict):
        raise ValueError("agent must be an object")
    name = raw.get("name")
    if not isinstance(name, str):
        raise ValueError("agent has no name")

    return Agent(
        name=name,
        model=model_from_dict(raw.get("model")),
        updated_at=parse_timestamp(raw.get("updatedAt")),
        created_at=parse_timestamp(raw.get("createdAt")),
        description=raw.get("description") or "",
        metadata={
            k: v for k, v in raw.items()
            if k not in ("name", "model", "updatedAt", "createdAt", "description")
        },
    )


def session_from_dict(raw: Any) -> Session:
    """Convert a raw conversation record.

    Sessions store their model flattened ("provider", "model", "workflowId",
    "agentId" at the top level); an incomplete one leaves ``model`` unset.
    """
    if not isinstance(raw, dict):
        raise ValueError("session must be an object")
    session_id = raw.get("id")
    if not session_id:
        raise ValueError("session has no id")

    return Session(
        id=str(session_id),
        title=raw.get("title") or "",
        updated_at=parse_timestamp(raw.get("updatedAt")),
        last_message_at=parse_timestamp(raw.get("lastMessageAt")),
        created_at=parse_timestamp(raw.get("createdAt")),
        owner_id=raw.get("ownerId") or "",
        model=unflatten_model(_flat_model_from_dict(raw)),
    )


def models_response_from_dict(raw: dict, source: Optional[str] = None) -> ChatModelsResponse:
    """Convert a raw catalog.

    Buckets keep the order of the raw mapping; known providers missing from it
    are added, empty, after them.
    """
    response: ChatModelsResponse = {}
    for provider, bucket in raw.items():
        entries = bucket.get("models") if isinstance(bucket, dict) else None
        if not isinstance(entries, list):
            logger.warning("Skipping provider %r in %s: no models list", provider, source)
            continue

        models = []
        for entry in entries:
            try:
                models.append(agent_from_dict(entry))
            except ValueError as e:
                logger.warning("Skipping agent under %r in %s: %s", provider, source, e)
        response[provider] = ProviderModels(models=models)

    for provider, bucket in empty_chat_models_response().items():
        response.setdefault(provider, bucket)
    return response


def _flat_model_from_dict(raw: dict) -> FlatModel:
    return FlatModel(
        provider=raw.get("provider") or None,
        model=raw.get("model") or None,
        workflow_id=raw.get("workflowId") or None,
        agent_id=raw.get("agentId") or None,
    )
