from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict

from netscope.ir.tensor import EMPTY_PLACEHOLDER
from netscope.layout.layering import Rows, flatten_rows


def format_count(number: int) -> str:
    if number >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{number / 1_000:.1f}K"
    return str(number)


@dataclass
class NetworkSummary:
    layers: int
    parameters: int
    input_shape: str
    output_shape: str
    depth: int
    kind_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def parameters_text(self) -> str:
        return format_count(self.parameters)

    def as_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["parameters_text"] = self.parameters_text
        return data


def summarize_network(rows: Rows) -> NetworkSummary:
    """
    Produce the network summary card data (used by the runners and the viewer).
    """
    nodes = flatten_rows(rows)
    layers = nodes[1:]
    counter: Counter = Counter(node.kind.value for node in layers)
    input_shape = layers[0].record.input_shape.format() if layers else EMPTY_PLACEHOLDER
    output_shape = layers[-1].record.output_shape.format() if layers else EMPTY_PLACEHOLDER
    return NetworkSummary(
        layers=len(layers),
        parameters=sum(node.record.parameters for node in nodes),
        input_shape=input_shape,
        output_shape=output_shape,
        depth=len(rows) - 1,
        kind_counts=dict(counter),
    )
