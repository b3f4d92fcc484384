from __future__ import annotations

import json
from pathlib import Path

import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from netscope.errors import DecodeError

from .models import ModelDescription
from .schema import MODEL_JSON_SCHEMA
from .validators import run_additional_checks


def dump_schema(path: Path) -> None:
    path.write_text(json.dumps(MODEL_JSON_SCHEMA, indent=2))


def _validate_schema(doc: object) -> None:
    validator = Draft202012Validator(MODEL_JSON_SCHEMA)
    errors = sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    if errors:
        msg = "\n".join(
            [
                f"{list(e.path)}: {e.message}" if e.path else e.message
                for e in errors
            ]
        )
        raise DecodeError(msg)


def _fill_default_names(desc: ModelDescription) -> None:
    taken = {layer.name for layer in desc.layers if layer.name}
    for idx, layer in enumerate(desc.layers):
        if layer.name:
            continue
        base = f"{layer.kind.value}_{idx}"
        name = base
        suffix = 1
        while name in taken:
            name = f"{base}_{suffix}"
            suffix += 1
        layer.name = name
        taken.add(name)


def decode_model(data: bytes) -> ModelDescription:
    """Decode a YAML (or JSON) network description into validated descriptors."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Model data is not UTF-8 text: {exc}") from exc
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DecodeError(f"Malformed model document: {exc}") from exc
    _validate_schema(doc)
    try:
        desc = ModelDescription.model_validate(doc)
    except ValidationError as exc:
        raise DecodeError(str(exc)) from exc
    _fill_default_names(desc)
    run_additional_checks(desc)
    return desc


def load_model_file(path: Path) -> ModelDescription:
    return decode_model(Path(path).read_bytes())
