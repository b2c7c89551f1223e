"""Model listing types: capabilities, architecture, pricing and model entries."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import SerializationError, _optional, _require


class ModelCapability(str, Enum):
    """A model capability used to filter the model list."""

    CHAT = "chat"
    COMPLETION = "completion"
    EMBEDDING = "embedding"
    TOOL = "tool"
    INSTRUCTION = "instruction"
    MULTIMODAL = "multimodal"
    VISION = "vision"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> ModelCapability | None:
        return cls.OTHER if isinstance(value, str) else None


class ModelFormatting(str, Enum):
    """Response formatting a model can produce."""

    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"
    XML = "xml"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> ModelFormatting | None:
        return cls.OTHER if isinstance(value, str) else None


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    return list(_require(data, key, list))


@dataclass
class ArchitectureDetails:
    """Input and output modalities and tokenizer of a model."""

    modality: str
    input_modalities: list[str]
    output_modalities: list[str]
    tokenizer: str
    instruct_type: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ArchitectureDetails:
        return cls(
            modality=_require(data, "modality", str),
            input_modalities=_str_list(data, "input_modalities"),
            output_modalities=_str_list(data, "output_modalities"),
            tokenizer=_require(data, "tokenizer", str),
            instruct_type=_optional(data, "instruct_type", str),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "modality": self.modality,
            "input_modalities": list(self.input_modalities),
            "output_modalities": list(self.output_modalities),
            "tokenizer": self.tokenizer,
            "instruct_type": self.instruct_type,
        }


_OPTIONAL_PRICES = (
    "request",
    "image",
    "web_search",
    "internal_reasoning",
    "input_cache_read",
    "input_cache_write",
)


@dataclass
class PricingInfo:
    """Prices of a model, kept as the strings the API returns."""

    prompt: str
    completion: str
    request: str | None = None
    image: str | None = None
    web_search: str | None = None
    internal_reasoning: str | None = None
    input_cache_read: str | None = None
    input_cache_write: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PricingInfo:
        extras = {key: _optional(data, key, str) for key in _OPTIONAL_PRICES}
        return cls(
            prompt=_require(data, "prompt", str),
            completion=_require(data, "completion", str),
            **extras,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"prompt": self.prompt, "completion": self.completion}
        for key in _OPTIONAL_PRICES:
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class TopProviderInfo:
    """Limits and moderation of the top provider for a model."""

    is_moderated: bool
    context_length: int | None = None
    max_completion_tokens: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopProviderInfo:
        return cls(
            is_moderated=_require(data, "is_moderated", bool),
            context_length=_optional(data, "context_length", int),
            max_completion_tokens=_optional(data, "max_completion_tokens", int),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "context_length": self.context_length,
            "max_completion_tokens": self.max_completion_tokens,
            "is_moderated": self.is_moderated,
        }


@dataclass
class ModelInfo:
    """One entry of the model list."""

    id: str
    name: str
    context_length: int
    created: int
    architecture: ArchitectureDetails
    pricing: PricingInfo
    top_provider: TopProviderInfo
    description: str | None = None
    canonical_slug: str | None = None
    hugging_face_id: str | None = None
    per_request_limits: Any = None
    supported_parameters: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelInfo:
        supported = _optional(data, "supported_parameters", list)
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            context_length=_require(data, "context_length", int),
            created=_require(data, "created", int),
            architecture=ArchitectureDetails.from_dict(
                _require(data, "architecture", Mapping)
            ),
            pricing=PricingInfo.from_dict(_require(data, "pricing", Mapping)),
            top_provider=TopProviderInfo.from_dict(_require(data, "top_provider", Mapping)),
            description=_optional(data, "description", str),
            canonical_slug=_optional(data, "canonical_slug", str),
            hugging_face_id=_optional(data, "hugging_face_id", str),
            per_request_limits=_optional(data, "per_request_limits"),
            supported_parameters=None if supported is None else list(supported),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "context_length": self.context_length,
            "created": self.created,
            "canonical_slug": self.canonical_slug,
            "hugging_face_id": self.hugging_face_id,
            "architecture": self.architecture.to_dict(),
            "pricing": self.pricing.to_dict(),
            "top_provider": self.top_provider.to_dict(),
            "per_request_limits": self.per_request_limits,
        }
        if self.supported_parameters is not None:
            out["supported_parameters"] = list(self.supported_parameters)
        return out


@dataclass
class ModelsRequest:
    """Filters for listing models."""

    capability: ModelCapability | None = None
    provider: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.capability is not None:
            out["capability"] = ModelCapability(self.capability).value
        if self.provider is not None:
            out["provider"] = self.provider
        return out


@dataclass
class ModelsResponse:
    """The list of available models."""

    data: list[ModelInfo]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelsResponse:
        return cls([ModelInfo.from_dict(item) for item in _require(data, "data", list)])

    @classmethod
    def from_json(cls, text: str | bytes) -> ModelsResponse:
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(str(exc)) from exc
        return cls.from_dict(decoded)