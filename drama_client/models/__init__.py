from .context import RequestContext
from .envelope import (
    EnvelopeError,
    EnvelopeUnwrapper,
    ResponseEnvelope,
    error_message_from_body,
)
from .resources import (
    AIServiceConfig,
    CreateAIConfigRequest,
    CreatePropRequest,
    Prop,
    PropCharacter,
    PropScene,
    ServiceType,
    TaskReference,
    TestConnectionRequest,
    UpdateAIConfigRequest,
    UpdatePropRequest,
)

__all__ = [
    "RequestContext",
    "EnvelopeError",
    "EnvelopeUnwrapper",
    "ResponseEnvelope",
    "error_message_from_body",
    "AIServiceConfig",
    "CreateAIConfigRequest",
    "CreatePropRequest",
    "Prop",
    "PropCharacter",
    "PropScene",
    "ServiceType",
    "TaskReference",
    "TestConnectionRequest",
    "UpdateAIConfigRequest",
    "UpdatePropRequest",
]
