"""Typed provider routing preferences."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeVar

from .errors import ConfigError, SerializationError, _optional

_E = TypeVar("_E", bound=Enum)


class DataCollection(str, Enum):
    """Data collection policy for providers."""

    ALLOW = "allow"
    DENY = "deny"


class ProviderSort(str, Enum):
    """How providers are sorted when no order is given."""

    PRICE = "price"
    THROUGHPUT = "throughput"


class Quantization(str, Enum):
    """Quantization levels used to filter providers."""

    INT4 = "int4"
    INT8 = "int8"
    FP6 = "fp6"
    FP8 = "fp8"
    FP16 = "fp16"
    BF16 = "bf16"
    FP32 = "fp32"
    UNKNOWN = "unknown"


def _enum(kind: type[_E], value: Any) -> _E:
    try:
        return kind(value)
    except ValueError:
        raise SerializationError(f"unknown {kind.__name__} value: {value!r}") from None


@dataclass
class ProviderPreferences:
    """Provider ordering, fallback, filtering and sorting preferences."""

    order: list[str] | None = None
    allow_fallbacks: bool | None = None
    require_parameters: bool | None = None
    data_collection: DataCollection | None = None
    ignore: list[str] | None = None
    quantizations: list[Quantization] | None = None
    sort: ProviderSort | None = None

    def validate(self) -> None:
        """Raise ConfigError if the order list is empty or has duplicates."""
        if self.order is None:
            return
        if not self.order:
            raise ConfigError("Provider order list cannot be empty")
        seen: set[str] = set()
        for provider in self.order:
            if provider in seen:
                raise ConfigError(f"Duplicate provider in order list: {provider}")
            seen.add(provider)

    def with_order(self, order: Iterable[str]) -> ProviderPreferences:
        return replace(self, order=list(order))

    def with_allow_fallbacks(self, allow_fallbacks: bool) -> ProviderPreferences:
        return replace(self, allow_fallbacks=allow_fallbacks)

    def with_require_parameters(self, require_parameters: bool) -> ProviderPreferences:
        return replace(self, require_parameters=require_parameters)

    def with_data_collection(
        self, data_collection: DataCollection | str
    ) -> ProviderPreferences:
        return replace(self, data_collection=DataCollection(data_collection))

    def with_ignore(self, ignore: Iterable[str]) -> ProviderPreferences:
        return replace(self, ignore=list(ignore))

    def with_quantizations(
        self, quantizations: Iterable[Quantization | str]
    ) -> ProviderPreferences:
        return replace(self, quantizations=[Quantization(q) for q in quantizations])

    def with_sort(self, sort: ProviderSort | str) -> ProviderPreferences:
        return replace(self, sort=ProviderSort(sort))

    def to_dict(self) -> dict[str, Any]:
        values = {
            "order": None if self.order is None else list(self.order),
            "allowFallbacks": self.allow_fallbacks,
            "requireParameters": self.require_parameters,
            "dataCollection": None
            if self.data_collection is None
            else self.data_collection.value,
            "ignore": None if self.ignore is None else list(self.ignore),
            "quantizations": None
            if self.quantizations is None
            else [q.value for q in self.quantizations],
            "sort": None if self.sort is None else self.sort.value,
        }
        return {key: value for key, value in values.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProviderPreferences:
        collection = _optional(data, "dataCollection", str)
        quantizations = _optional(data, "quantizations", list)
        sort = _optional(data, "sort", str)
        order = _optional(data, "order", list)
        ignore = _optional(data, "ignore", list)
        return cls(
            order=None if order is None else list(order),
            allow_fallbacks=_optional(data, "allowFallbacks", bool),
            require_parameters=_optional(data, "requireParameters", bool),
            data_collection=None
            if collection is None
            else _enum(DataCollection, collection),
            ignore=None if ignore is None else list(ignore),
            quantizations=None
            if quantizations is None
            else [_enum(Quantization, q) for q in quantizations],
            sort=None if sort is None else _enum(ProviderSort, sort),
        )