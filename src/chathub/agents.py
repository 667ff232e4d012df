"""Agent identity, catalog filtering and navigation."""

from .core import (
    CHAT_VIEW,
    Agent,
    AgentFilter,
    AgentRoute,
    CustomAgentModel,
    LlmModel,
    ModelSelector,
    N8nModel,
)
from .timestamps import sort_key


def is_matched_agent(agent: Agent, selector: ModelSelector) -> bool:
    """Return True if the agent is the one the selector points at.

    Each side's branch comes from its own provider, so selectors of different
    branches never match even when their identifiers are equal.
    """
    model = agent.model
    if isinstance(model, N8nModel):
        return isinstance(selector, N8nModel) and model.workflow_id == selector.workflow_id
    if isinstance(model, CustomAgentModel):
        return isinstance(selector, CustomAgentModel) and model.agent_id == selector.agent_id
    return (
        isinstance(selector, LlmModel)
        and model.provider == selector.provider
        and model.model == selector.model
    )


def filter_and_sort_agents(agents: list[Agent], agent_filter: AgentFilter) -> list[Agent]:
    """Return the agents matching the filter, newest first. The input is not modified."""
    search_lower = agent_filter.search.lower()

    filtered = [
        a for a in agents
        if (not search_lower or search_lower in a.name.lower())
        and (not agent_filter.provider or a.model.provider == agent_filter.provider)
    ]

    if agent_filter.sort_by == "updatedAt":
        # sorted() is stable, so equal timestamps keep their input order
        filtered = sorted(filtered, key=lambda a: sort_key(a.updated_at), reverse=True)

    return filtered


def get_agent_route(selector: ModelSelector) -> AgentRoute:
    if isinstance(selector, N8nModel):
        return AgentRoute(name=CHAT_VIEW, query={"workflowId": selector.workflow_id})
    if isinstance(selector, CustomAgentModel):
        return AgentRoute(name=CHAT_VIEW, query={"agentId": selector.agent_id})
    return AgentRoute(name=CHAT_VIEW)
