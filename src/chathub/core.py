"""Core data models for chathub."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

N8N_PROVIDER = "n8n"
CUSTOM_AGENT_PROVIDER = "custom-agent"

# Route id of the chat view every agent opens in.
CHAT_VIEW = "chat"

TODAY = "Today"
YESTERDAY = "Yesterday"
THIS_WEEK = "This week"
OLDER = "Older"
RELATIVE_DATE_ORDER = (TODAY, YESTERDAY, THIS_WEEK, OLDER)


@dataclass(frozen=True)
class N8nModel:
    """A workflow-backed agent."""

    workflow_id: str
    provider: str = field(default=N8N_PROVIDER, init=False)


@dataclass(frozen=True)
class CustomAgentModel:
    """An agent configured by the user."""

    agent_id: str
    provider: str = field(default=CUSTOM_AGENT_PROVIDER, init=False)


@dataclass(frozen=True)
class LlmModel:
    """A raw LLM provider/model pair."""

    provider: str  # "openai", "anthropic", ... never "n8n" or "custom-agent"
    model: str

    def __post_init__(self):
        if self.provider in (N8N_PROVIDER, CUSTOM_AGENT_PROVIDER):
            raise ValueError(f"{self.provider!r} is not an LLM provider")


ModelSelector = Union[N8nModel, CustomAgentModel, LlmModel]


@dataclass(frozen=True)
class FlatModel:
    """Fixed-shape storage form of a ModelSelector.

    Exactly the identifier of the active branch is set; the other two are None.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    workflow_id: Optional[str] = None
    agent_id: Optional[str] = None


@dataclass
class Agent:
    """A catalog entry the user can chat with."""

    name: str
    model: ModelSelector
    updated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    description: str = ""
    metadata: dict = field(default_factory=dict)


@dataclass
class ProviderModels:
    """Agents offered under one provider id."""

    models: list[Agent] = field(default_factory=list)


# provider id -> ProviderModels, in catalog order
ChatModelsResponse = dict[str, ProviderModels]


@dataclass
class Session:
    """A single chat conversation."""

    id: str
    title: str
    updated_at: Optional[datetime] = None
    last_message_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    owner_id: str = ""
    model: Optional[ModelSelector] = None

    @property
    def sidebar_timestamp(self) -> Optional[datetime]:
        """Timestamp the sidebar orders and groups by."""
        return self.last_message_at or self.updated_at


@dataclass
class RelativeDateGroup:
    group: str  # one of RELATIVE_DATE_ORDER
    sessions: list[Session] = field(default_factory=list)


@dataclass
class AgentFilter:
    search: str = ""
    provider: str = ""  # empty matches every provider
    sort_by: str = "updatedAt"


@dataclass
class AgentRoute:
    name: str
    query: Optional[dict[str, str]] = None


@dataclass
class StreamingState:
    """Fields of an in-progress assistant response, as far as they are known."""

    execution_id: Optional[int] = None
    previous_message_id: Optional[str] = None
    model: Optional[ModelSelector] = None


@dataclass
class AiMessage:
    """An assistant message, mutated in place while the response streams."""

    id: str
    session_id: str
    status: str = "running"  # "running" | "success" | "error" | "cancelled"
    content: str = ""
    type: str = "ai"
    name: str = "AI"
    execution_id: Optional[int] = None
    previous_message_id: Optional[str] = None
    retry_of_message_id: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    workflow_id: Optional[str] = None
    agent_id: Optional[str] = None
