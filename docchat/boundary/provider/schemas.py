"""
Provider payload schemas.

Decodes OpenAI SDK objects into the narrow shapes this application relies
on. Message content is a discriminated union on ``type``; statuses are
literal sets. Anything else fails loudly with ProviderResponseShapeError
instead of surfacing later as an attribute error.

Dependencies: pydantic
System role: Provider response decoding at the boundary
"""

from typing import Annotated, Any, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from docchat.core.exceptions import ProviderResponseShapeError

RunStatus = Literal[
    "queued",
    "in_progress",
    "requires_action",
    "cancelling",
    "cancelled",
    "failed",
    "completed",
    "incomplete",
    "expired",
]

TERMINAL_RUN_STATUSES = frozenset(
    {"requires_action", "cancelled", "failed", "completed", "incomplete", "expired"}
)


class ProviderModel(BaseModel):
    """Base for decoded provider payloads; unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class ProviderResource(ProviderModel):
    """Any provider object identified by an ID."""

    id: str


class FileRecord(ProviderResource):
    """Uploaded file metadata."""

    filename: str | None = None


class FileCounts(ProviderModel):
    completed: int = 0
    failed: int = 0
    in_progress: int = 0
    cancelled: int = 0
    total: int = 0


class FileBatchSnapshot(ProviderResource):
    """Vector store file batch after polling."""

    status: Literal["in_progress", "completed", "cancelled", "failed"]
    file_counts: FileCounts = Field(default_factory=FileCounts)


class RunSnapshot(ProviderResource):
    """Assistant run state."""

    status: RunStatus

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES


class TextValue(ProviderModel):
    value: str


class TextPart(ProviderModel):
    type: Literal["text"]
    text: TextValue


class ImageFilePart(ProviderModel):
    type: Literal["image_file"]


class ImageUrlPart(ProviderModel):
    type: Literal["image_url"]


class RefusalPart(ProviderModel):
    type: Literal["refusal"]
    refusal: str = ""


ContentPart = Annotated[
    Union[TextPart, ImageFilePart, ImageUrlPart, RefusalPart],
    Field(discriminator="type"),
]


class ThreadMessage(ProviderResource):
    """Thread message with role, run association and typed content parts."""

    role: Literal["user", "assistant"]
    run_id: str | None = None
    content: list[ContentPart] = Field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Text of the first content part, or None if it is not plain text."""
        if self.content and isinstance(self.content[0], TextPart):
            return self.content[0].text.value
        return None


class ResponseSnapshot(ProviderResource):
    """Result of a stateless responses call."""

    output_text: str


ModelT = TypeVar("ModelT", bound=ProviderModel)


def decode(model: type[ModelT], payload: Any, operation: str) -> ModelT:
    """
    Decode a provider payload into a schema model.

    Args:
        model: Target schema class
        payload: SDK object (pydantic) or plain dict
        operation: Provider operation name, for error context

    Returns:
        Decoded model instance

    Raises:
        ProviderResponseShapeError: If the payload does not match the schema
    """
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
        raise ProviderResponseShapeError(
            f"{model.__name__} ({fields or 'root'})",
            operation=operation,
        ) from e
