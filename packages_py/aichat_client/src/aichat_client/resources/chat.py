from typing import Optional

from ..core.api_result import APIResult
from ..errors import AIChatError
from ..streaming.stream import Stream
from ._resource import APIResource, reject_reserved, unwrap_data
from .models import Discussion


class ChatResource(APIResource):
    def create(self, assistant_id: Optional[str] = None, **options) -> APIResult[Discussion]:
        """Open a new discussion with an assistant (the configured one by default)."""
        assistant_id = assistant_id or self._client.config.assistant_id
        if not assistant_id:
            raise AIChatError("assistant_id is required")
        reject_reserved(options, "body")
        return self._client.post(
            "/chat/create-chat",
            body={"input": {"assistant_id": assistant_id}},
            **options,
        ).then_unwrap(unwrap_data(Discussion))

    def completions(self, discussion_id: str, user: str, **options) -> APIResult[Stream]:
        """
        Send a user message and stream the assistant's answer.

        The endpoint streams the answer incrementally; iterate the returned
        ``Stream`` for event records, or ``stream.iter_text()`` for a
        plain-text body.
        """
        reject_reserved(options, "body", "stream")
        return self._client.post(
            f"/chat/completions/{discussion_id}",
            body={"input": {"user": user}},
            stream=True,
            **options,
        )
