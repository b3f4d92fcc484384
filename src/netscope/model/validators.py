from __future__ import annotations

from typing import List, Set

from netscope.errors import DecodeError

from .models import LayerDescriptor, ModelDescription


def _validate_names(layers: List[LayerDescriptor]) -> None:
    seen: Set[str] = set()
    for layer in layers:
        if layer.name in seen:
            raise DecodeError(f"Duplicate layer name '{layer.name}'")
        seen.add(layer.name)


def _validate_parameters(layers: List[LayerDescriptor]) -> None:
    for layer in layers:
        if layer.parameters is not None and layer.parameters < 0:
            raise DecodeError(f"Layer '{layer.name}' parameters must be non-negative")


def _validate_convolutions(layers: List[LayerDescriptor]) -> None:
    for layer in layers:
        if not layer.kind.is_convolution:
            if layer.filter_size is not None or layer.filter_count is not None:
                raise DecodeError(
                    f"Layer '{layer.name}' of kind {layer.kind.value} cannot declare filters"
                )
            continue
        if layer.filter_size is None or layer.filter_count is None:
            raise DecodeError(
                f"Convolution layer '{layer.name}' requires 'filter_size' and 'filter_count'"
            )


def _validate_inputs(layers: List[LayerDescriptor]) -> None:
    seen: List[str] = []
    for layer in layers:
        for ref in layer.inputs or []:
            if ref == layer.name:
                raise DecodeError(f"Layer '{layer.name}' cannot feed into itself")
            if ref not in seen:
                raise DecodeError(
                    f"Layer '{layer.name}' references '{ref}' before it is defined"
                )
        seen.append(layer.name)


def run_additional_checks(desc: ModelDescription) -> None:
    layers = desc.layers
    _validate_names(layers)
    _validate_parameters(layers)
    _validate_convolutions(layers)
    _validate_inputs(layers)
