from .assistant import AssistantResource
from .chat import ChatResource
from .models import APIEnvelope, APIStatus, Assistant, ChatMessage, Discussion

__all__ = [
    "AssistantResource",
    "ChatResource",
    "APIEnvelope",
    "APIStatus",
    "Assistant",
    "ChatMessage",
    "Discussion",
]
