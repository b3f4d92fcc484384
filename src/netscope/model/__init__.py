"""Model importer: YAML/JSON network descriptions to validated layer descriptors."""

from .api import decode_model, dump_schema, load_model_file
from .models import LayerDescriptor, ModelDescription, WeightTensor

__all__ = [
    "decode_model",
    "load_model_file",
    "dump_schema",
    "LayerDescriptor",
    "ModelDescription",
    "WeightTensor",
]
