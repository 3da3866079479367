from typing import Optional

from ..core.api_result import APIResult
from ..errors import AIChatError
from ._resource import APIResource, unwrap_data
from .models import Assistant


class AssistantResource(APIResource):
    def info(self, assistant_id: Optional[str] = None, **options) -> APIResult[Assistant]:
        """Fetch an assistant's public profile (name, logo, colors, greeting).

        Defaults to the client's configured assistant.
        """
        assistant_id = assistant_id or self._client.config.assistant_id
        if not assistant_id:
            raise AIChatError("assistant_id is required")
        return self._client.get(f"/assistant/info/{assistant_id}", **options).then_unwrap(
            unwrap_data(Assistant)
        )
