"""Voice activity detection settings as tagged variants.

Kept for compatibility with sessions configured through the single
``turn_detection`` object. Each variant is its own frozen model and only
carries its own fields, so serializing a variant can never leak another
variant's parameters.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class TurnDetectionType(str, Enum):
    DISABLED = "disabled"
    SERVER_VAD = "server_vad"
    SEMANTIC_VAD = "semantic_vad"


class Eagerness(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    AUTO = "auto"


# Omitted from the wire form when it is the active discriminant.
DEFAULT_TURN_DETECTION = TurnDetectionType.DISABLED


class VoiceActivityDetectionSettings(BaseModel):
    """Base for the VAD variants. Build instances through the factories."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    create_response: bool | None = None
    interrupt_response: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _require_variant(cls, data: Any) -> Any:
        if cls is VoiceActivityDetectionSettings:
            raise ValueError(
                "Build VAD settings with disabled(), server_vad(), semantic_vad() or create()"
            )
        return data

    @property
    def kind(self) -> TurnDetectionType:
        return TurnDetectionType(self.type)

    def to_dict(self) -> dict[str, Any]:
        """Compact wire form: unset fields and the default ``type`` are dropped."""
        data = self.model_dump(mode="json", exclude_none=True)
        if data.get("type") == DEFAULT_TURN_DETECTION.value:
            del data["type"]
        return data

    @staticmethod
    def disabled() -> "DisabledVAD":
        return DisabledVAD()

    @staticmethod
    def server_vad(
        detection_threshold: float | None = None,
        prefix_padding_ms: int | None = None,
        silence_duration_ms: int | None = None,
        create_response: bool | None = True,
        interrupt_response: bool | None = None,
    ) -> "ServerVAD":
        return ServerVAD(
            threshold=detection_threshold,
            prefix_padding_ms=prefix_padding_ms,
            silence_duration_ms=silence_duration_ms,
            create_response=create_response,
            interrupt_response=interrupt_response,
        )

    @staticmethod
    def semantic_vad(
        eagerness: Eagerness | str | None = None,
        create_response: bool | None = True,
        interrupt_response: bool | None = None,
    ) -> "SemanticVAD":
        return SemanticVAD(
            eagerness=Eagerness(eagerness) if eagerness is not None else None,
            create_response=create_response,
            interrupt_response=interrupt_response,
        )

    @classmethod
    def create(
        cls,
        kind: TurnDetectionType | str | None = TurnDetectionType.SERVER_VAD,
        *,
        detection_threshold: float | None = None,
        prefix_padding_ms: int | None = None,
        silence_duration_ms: int | None = None,
        create_response: bool | None = True,
        interrupt_response: bool | None = None,
        eagerness: Eagerness | str | None = None,
    ) -> "VoiceActivityDetectionSettings":
        """Build the variant selected by ``kind``.

        Arguments that the selected variant does not own are discarded, so
        ``create("disabled", detection_threshold=0.8)`` still yields a
        disabled variant with no threshold and ``create_response`` false.
        ``kind=None`` selects ``server_vad``.
        """
        kind = TurnDetectionType(kind) if kind is not None else TurnDetectionType.SERVER_VAD
        if kind is TurnDetectionType.DISABLED:
            return cls.disabled()
        if kind is TurnDetectionType.SEMANTIC_VAD:
            return cls.semantic_vad(
                eagerness=eagerness,
                create_response=create_response,
                interrupt_response=interrupt_response,
            )
        return cls.server_vad(
            detection_threshold=detection_threshold,
            prefix_padding_ms=prefix_padding_ms,
            silence_duration_ms=silence_duration_ms,
            create_response=create_response,
            interrupt_response=interrupt_response,
        )


class DisabledVAD(VoiceActivityDetectionSettings):
    """Turn detection off; the service never creates responses on its own."""

    type: Literal["disabled"] = "disabled"
    create_response: Literal[False] = False
    interrupt_response: None = None


class ServerVAD(VoiceActivityDetectionSettings):
    """Silence-based detection on the server."""

    type: Literal["server_vad"] = "server_vad"
    threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    prefix_padding_ms: int | None = Field(default=None, ge=0)
    silence_duration_ms: int | None = Field(default=None, ge=0)


class SemanticVAD(VoiceActivityDetectionSettings):
    """Model-based end-of-turn detection."""

    type: Literal["semantic_vad"] = "semantic_vad"
    eagerness: Eagerness | None = None


VADSettings = Annotated[
    Union[DisabledVAD, ServerVAD, SemanticVAD], Field(discriminator="type")
]

_vad_adapter: TypeAdapter[VADSettings] = TypeAdapter(VADSettings)


def parse_vad_settings(data: dict[str, Any]) -> VoiceActivityDetectionSettings:
    """Read a wire-form object back into its variant.

    A missing ``type`` means the default discriminant.
    """
    data = dict(data)
    data.setdefault("type", DEFAULT_TURN_DETECTION.value)
    return _vad_adapter.validate_python(data)
