"""
AI Chat API client.
"""
from typing import Any, Dict, Optional

from .config import ClientConfig
from .core.base_client import APIClient
from .resources import AssistantResource, ChatResource
from .types import FinalRequestOptions


class AIChatClient(APIClient):
    """
    Client for the AI Chat API.

    Authenticates with a bearer token and exposes the API's endpoint groups
    as ``client.assistant`` and ``client.chat``.

    Example:
        async with AIChatClient(api_key="sk-...") as client:
            assistant = await client.assistant.info("abc")
            discussion = await client.chat.create(assistant.id)
            stream = await client.chat.completions(discussion.id, "Hello")
            async for record in stream:
                print(record)
    """

    def __init__(self, config: Optional[ClientConfig] = None, **options: Any) -> None:
        if config is None:
            config = ClientConfig(**options)
        elif options:
            raise TypeError("Pass either a ClientConfig or keyword options, not both")
        super().__init__(config)
        self.assistant = AssistantResource(self)
        self.chat = ChatResource(self)

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def assistant_id(self) -> Optional[str]:
        return self.config.assistant_id

    def auth_headers(self, options: FinalRequestOptions) -> Dict[str, Any]:
        return {"Authorization": f"Bearer {self.api_key}"}
