from __future__ import annotations

from typing import Dict, Sequence

from netscope.errors import DecodeError
from netscope.ir.tensor import TensorShape
from netscope.ir.types import GraphNode, LayerKind, LayerRecord
from netscope.layout.layering import ensure_acyclic
from netscope.model.models import LayerDescriptor


def _entry_node(layers: Sequence[LayerDescriptor]) -> GraphNode:
    shape = TensorShape.from_array(layers[0].input_size) if layers else TensorShape.empty()
    record = LayerRecord(
        kind=LayerKind.INPUT,
        input_shape=shape,
        output_shape=shape,
        name="input",
    )
    return GraphNode(record)


def build_graph(layers: Sequence[LayerDescriptor]) -> GraphNode:
    """Chain ``root -> layer1 -> layer2 -> ...`` and return the root."""
    root = _entry_node(layers)
    working = root
    for desc in layers:
        node = GraphNode(LayerRecord.from_descriptor(desc))
        working.connect(node)
        working = node
    return root


def build_branched_graph(layers: Sequence[LayerDescriptor]) -> GraphNode:
    """Wire layers by their declared ``inputs``; layers without inputs follow the previous one."""
    root = _entry_node(layers)
    by_name: Dict[str, GraphNode] = {}
    previous = root
    for desc in layers:
        node = GraphNode(LayerRecord.from_descriptor(desc))
        if desc.inputs:
            for ref in desc.inputs:
                parent = by_name.get(ref)
                if parent is None:
                    raise DecodeError(
                        f"Layer '{desc.name}' references '{ref}' before it is defined"
                    )
                parent.connect(node)
        else:
            previous.connect(node)
        if desc.name:
            by_name[desc.name] = node
        previous = node
    ensure_acyclic(root)
    return root
