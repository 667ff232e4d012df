"""Conversions between model selectors, flat records and token strings.

A selector has three storage shapes:

- the selector itself (N8nModel, CustomAgentModel or LlmModel),
- a FlatModel, which always carries all four fields,
- a token string "<provider>::<identifier>", used in URLs and keys.

Decoding never raises: malformed input yields None.
"""

from typing import Optional

from .config import get_llm_providers
from .core import (
    CUSTOM_AGENT_PROVIDER,
    N8N_PROVIDER,
    Agent,
    ChatModelsResponse,
    CustomAgentModel,
    FlatModel,
    LlmModel,
    ModelSelector,
    N8nModel,
    ProviderModels,
)

TOKEN_SEPARATOR = "::"


def flatten_model(selector: ModelSelector) -> FlatModel:
    if isinstance(selector, N8nModel):
        return FlatModel(provider=N8N_PROVIDER, workflow_id=selector.workflow_id)
    if isinstance(selector, CustomAgentModel):
        return FlatModel(provider=CUSTOM_AGENT_PROVIDER, agent_id=selector.agent_id)
    return FlatModel(provider=selector.provider, model=selector.model)


def unflatten_model(flat: FlatModel) -> Optional[ModelSelector]:
    """Rebuild a selector from a stored record, or None if the record is incomplete."""
    if not flat.provider:
        return None

    if flat.provider == N8N_PROVIDER:
        if not flat.workflow_id:
            return None
        return N8nModel(workflow_id=flat.workflow_id)

    if flat.provider == CUSTOM_AGENT_PROVIDER:
        if not flat.agent_id:
            return None
        return CustomAgentModel(agent_id=flat.agent_id)

    if not flat.model:
        return None
    return LlmModel(provider=flat.provider, model=flat.model)


def model_identifier(selector: ModelSelector) -> str:
    """Return the identifier that is meaningful for the selector's provider."""
    if isinstance(selector, N8nModel):
        return selector.workflow_id
    if isinstance(selector, CustomAgentModel):
        return selector.agent_id
    return selector.model


def stringify_model(selector: ModelSelector) -> str:
    return f"{selector.provider}{TOKEN_SEPARATOR}{model_identifier(selector)}"


def is_llm_provider(provider: str) -> bool:
    return provider in get_llm_providers()


def from_string_to_model(token: str) -> Optional[ModelSelector]:
    """Parse a "<provider>::<identifier>" token.

    Only the first separator splits, so identifiers may themselves contain "::".
    LLM providers must be known (see config.get_llm_providers).
    """
    provider, sep, identifier = token.partition(TOKEN_SEPARATOR)
    if not sep or not provider or not identifier:
        return None

    if provider == N8N_PROVIDER:
        return N8nModel(workflow_id=identifier)
    if provider == CUSTOM_AGENT_PROVIDER:
        return CustomAgentModel(agent_id=identifier)
    if is_llm_provider(provider):
        return LlmModel(provider=provider, model=identifier)
    return None


def find_one_from_models_response(response: ChatModelsResponse) -> Optional[Agent]:
    """Return the first agent of the first non-empty bucket, in catalog order."""
    for bucket in response.values():
        if bucket.models:
            return bucket.models[0]
    return None


def empty_chat_models_response() -> ChatModelsResponse:
    """Return a catalog with every known bucket present and empty."""
    response = {provider: ProviderModels() for provider in get_llm_providers()}
    response[N8N_PROVIDER] = ProviderModels()
    response[CUSTOM_AGENT_PROVIDER] = ProviderModels()
    return response
