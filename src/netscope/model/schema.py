from __future__ import annotations

from netscope.ir.types import LayerKind

_DIMS = {
    "type": "array",
    "items": {"type": "integer", "minimum": 0},
    "maxItems": 3,
}

MODEL_JSON_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Network description v0.1",
    "type": "object",
    "required": ["layers"],
    "properties": {
        "name": {"type": "string"},
        "layers": {
            "type": "array",
            "minItems": 1,
            "items": {"$ref": "#/$defs/layer"},
        },
    },
    "$defs": {
        "weight": {
            "type": "object",
            "required": ["size", "values"],
            "properties": {
                "size": {
                    "type": "array",
                    "items": {"type": "integer", "minimum": 0},
                    "minItems": 1,
                    "maxItems": 3,
                },
                "values": {"type": "array", "items": {"type": "number"}},
            },
            "additionalProperties": False,
        },
        "layer": {
            "type": "object",
            "required": ["kind"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "kind": {"enum": [kind.value for kind in LayerKind]},
                "input_size": _DIMS,
                "output_size": _DIMS,
                "parameters": {"type": "integer"},
                "details": {"type": "string"},
                "filter_size": {
                    "type": "array",
                    "items": {"type": "integer", "minimum": 1},
                    "minItems": 2,
                    "maxItems": 2,
                },
                "filter_count": {"type": "integer", "minimum": 1},
                "inputs": {"type": "array", "items": {"type": "string"}},
                "weights": {"type": "array", "items": {"$ref": "#/$defs/weight"}},
            },
            "additionalProperties": True,
        },
    },
}
