"""Provider routing preferences and model coverage profiles."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .errors import _optional, _require


@dataclass
class RoutingPreferences:
    """Free-form provider preferences with provider-specific options."""

    order: list[str] | None = None
    allow_fallbacks: bool | None = None
    require_parameters: bool | None = None
    data_collection: str | None = None
    ignore: list[str] | None = None
    quantizations: list[str] | None = None
    sort: str | None = None
    provider_options: dict[str, Any] | None = None
    route_optimizations: list[str] | None = None

    def with_order(self, order: Iterable[str]) -> RoutingPreferences:
        return replace(self, order=list(order))

    def with_allow_fallbacks(self, allow: bool) -> RoutingPreferences:
        return replace(self, allow_fallbacks=allow)

    def with_require_parameters(self, require: bool) -> RoutingPreferences:
        return replace(self, require_parameters=require)

    def with_data_collection(self, collection: str) -> RoutingPreferences:
        return replace(self, data_collection=str(collection))

    def with_ignored_providers(self, ignore: Iterable[str]) -> RoutingPreferences:
        return replace(self, ignore=list(ignore))

    def with_quantizations(self, quantizations: Iterable[str]) -> RoutingPreferences:
        return replace(self, quantizations=list(quantizations))

    def with_sort(self, sort: str) -> RoutingPreferences:
        return replace(self, sort=str(sort))

    def with_provider_option(self, provider: str, options: Any) -> RoutingPreferences:
        merged = dict(self.provider_options or {})
        merged[str(provider)] = options
        return replace(self, provider_options=merged)

    def with_route_optimizations(self, optimizations: Iterable[str]) -> RoutingPreferences:
        return replace(self, route_optimizations=list(optimizations))

    def to_dict(self) -> dict[str, Any]:
        values = {
            "order": self.order,
            "allow_fallbacks": self.allow_fallbacks,
            "require_parameters": self.require_parameters,
            "data_collection": self.data_collection,
            "ignore": self.ignore,
            "quantizations": self.quantizations,
            "sort": self.sort,
            "provider_options": self.provider_options,
            "route_optimizations": self.route_optimizations,
        }
        out: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            out[key] = value
        return out


@dataclass
class ModelCoverageProfile:
    """A primary model with ordered fallbacks and fallback behaviour."""

    primary: str
    fallbacks: list[str] | None = None
    auto_fallback: bool | None = None
    latency_threshold_ms: int | None = None
    fail_fast: bool | None = None
    provider_options: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"primary": self.primary}
        if self.fallbacks is not None:
            out["fallbacks"] = list(self.fallbacks)
        if self.auto_fallback is not None:
            out["auto_fallback"] = self.auto_fallback
        if self.latency_threshold_ms is not None:
            out["latency_threshold_ms"] = self.latency_threshold_ms
        if self.fail_fast is not None:
            out["fail_fast"] = self.fail_fast
        if self.provider_options is not None:
            out["provider_options"] = dict(self.provider_options)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelCoverageProfile:
        fallbacks = _optional(data, "fallbacks", list)
        options = _optional(data, "provider_options", Mapping)
        return cls(
            primary=_require(data, "primary", str),
            fallbacks=None if fallbacks is None else list(fallbacks),
            auto_fallback=_optional(data, "auto_fallback", bool),
            latency_threshold_ms=_optional(data, "latency_threshold_ms", int),
            fail_fast=_optional(data, "fail_fast", bool),
            provider_options=None if options is None else dict(options),
        )


class PredefinedProfile(str, Enum):
    """Named optimisation targets; a custom profile is a ModelCoverageProfile."""

    LOWEST_LATENCY = "lowest_latency"
    LOWEST_COST = "lowest_cost"
    HIGHEST_QUALITY = "highest_quality"


@dataclass
class RouterConfig:
    """Model selection profile plus optional provider preferences."""

    profile: PredefinedProfile | ModelCoverageProfile
    provider_preferences: RoutingPreferences | None = None

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.profile, ModelCoverageProfile):
            profile: Any = {"custom": self.profile.to_dict()}
        else:
            profile = PredefinedProfile(self.profile).value
        out: dict[str, Any] = {"profile": profile}
        if self.provider_preferences is not None:
            out["provider_preferences"] = self.provider_preferences.to_dict()
        return out


def general_profile() -> ModelCoverageProfile:
    """Models suited to instruction following and general tasks."""
    return ModelCoverageProfile(
        primary="openai/gpt-4o",
        fallbacks=[
            "anthropic/claude-3-opus-20240229",
            "anthropic/claude-3-sonnet-20240229",
            "google/gemini-1.5-pro",
        ],
        auto_fallback=True,
        latency_threshold_ms=10000,
        fail_fast=False,
    )


def code_profile() -> ModelCoverageProfile:
    """Models suited to code generation and understanding."""
    return ModelCoverageProfile(
        primary="anthropic/claude-3-opus-20240229",
        fallbacks=["openai/gpt-4o", "google/gemini-1.5-pro"],
        auto_fallback=True,
        latency_threshold_ms=8000,
        fail_fast=False,
    )


def long_context_profile() -> ModelCoverageProfile:
    """Models with long context windows."""
    return ModelCoverageProfile(
        primary="anthropic/claude-3-opus-20240229",
        fallbacks=["google/gemini-1.5-pro", "openai/gpt-4-turbo"],
        auto_fallback=True,
        latency_threshold_ms=15000,
        fail_fast=False,
    )