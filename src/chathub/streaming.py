"""Assistant message records built from streaming responses."""

from typing import Optional

from .codec import flatten_model
from .core import AiMessage, FlatModel, StreamingState


def create_ai_message_from_streaming_state(
    session_id: str,
    message_id: str,
    streaming: Optional[StreamingState] = None,
) -> AiMessage:
    """Create the record of an assistant response that has just started streaming.

    The message starts out running with empty content. Whatever the stream has
    already reported (execution, previous message, model) is copied over; the
    model is stored flattened, so only the LLM branch sets ``model``.
    """
    streaming = streaming or StreamingState()
    flat = flatten_model(streaming.model) if streaming.model is not None else FlatModel()

    return AiMessage(
        id=message_id,
        session_id=session_id,
        status="running",
        content="",
        execution_id=streaming.execution_id,
        previous_message_id=streaming.previous_message_id,
        retry_of_message_id=None,
        provider=flat.provider,
        model=flat.model,
        workflow_id=flat.workflow_id,
        agent_id=flat.agent_id,
    )
