"""Type definitions for agent execution results and Future Self Bridge metadata."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignatureDescriptor(BaseModel):
    """Signature block attached by the server to every agent response.

    The SDK never verifies it; it is carried through to memory metadata.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hash: str | None = None
    signature: str | None = None
    public_key: str | None = Field(default=None, alias="publicKey")
    algorithm: str | None = None
    suite: str | None = None
    quantum_resistant: bool | None = Field(default=None, alias="quantumResistant")
    signed_at: str | None = Field(default=None, alias="signedAt")


class ExecutionResult(BaseModel):
    """Raw agent response.

    Known self-awareness fields are typed; agent-specific payload fields
    (code, subject, keyPoints, ...) are kept as extras and exposed through
    ``extra_fields``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    response: Any = None
    missing_context: list[str] = Field(default_factory=list, alias="missingContext")
    continue_: bool | None = Field(default=None, alias="continue")
    question_for_user: bool | None = Field(default=None, alias="questionForUser")
    question: str | None = None
    signature: SignatureDescriptor | None = None
    signature_algorithm: str | None = Field(default=None, alias="signatureAlgorithm")

    @field_validator("missing_context", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SelfAwareness(BaseModel):
    """Completeness assessment derived from one ExecutionResult."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    complete: bool
    missing_context: list[str] = Field(default_factory=list, alias="missingContext")
    needs_continue: bool = Field(default=False, alias="needsContinue")
    has_question: bool = Field(default=False, alias="hasQuestion")
    question: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)


class BridgeMetadata(BaseModel):
    """How a Future Self Bridge run ended."""

    model_config = ConfigDict(populate_by_name=True)

    schema_planned: dict[str, Any] = Field(alias="schemaPlanned")
    self_awareness: SelfAwareness = Field(alias="selfAwareness")
    attempts: int
    complete: bool
    reason: Literal["max_retries_reached", "auto_retry_disabled"] | None = None


class BridgeResult(BaseModel):
    """Final execution plus the bridge metadata describing how it was reached."""

    model_config = ConfigDict(populate_by_name=True)

    execution: ExecutionResult
    future_self_bridge: BridgeMetadata = Field(alias="futureSelfBridge")

    @property
    def response(self) -> Any:
        return self.execution.response

    @property
    def complete(self) -> bool:
        return self.future_self_bridge.complete

    def to_dict(self) -> dict[str, Any]:
        """Flatten to the wire shape: execution fields plus a ``futureSelfBridge`` key."""
        data = self.execution.to_dict()
        data["futureSelfBridge"] = self.future_self_bridge.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        return data
