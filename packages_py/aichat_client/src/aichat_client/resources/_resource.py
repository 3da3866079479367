from typing import TYPE_CHECKING, Any, Callable, Mapping, Type, TypeVar

from pydantic import BaseModel

from ..errors import AIChatError
from .models import APIEnvelope

if TYPE_CHECKING:
    from ..core.base_client import APIClient

M = TypeVar("M", bound=BaseModel)


class APIResource:
    """Base class for groups of endpoints bound to a client."""

    def __init__(self, client: "APIClient") -> None:
        self._client = client


def reject_reserved(options: Mapping[str, Any], *names: str) -> None:
    """Refuse per-call options that the endpoint sets itself."""
    clashing = sorted(name for name in names if name in options)
    if clashing:
        raise AIChatError(f"Option(s) set by this endpoint cannot be overridden: {', '.join(clashing)}")


def unwrap_data(model: Type[M]) -> Callable[[Any], M]:
    """Build a transform that validates an envelope and returns its ``data`` as ``model``."""

    def transform(payload: Any) -> M:
        envelope = APIEnvelope.model_validate(payload)
        return model.model_validate(envelope.data)

    return transform
