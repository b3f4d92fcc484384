from dataclasses import dataclass

from netscope.ir.types import GraphNode
from netscope.layout.layering import Rows, assign_layers
from netscope.model.models import ModelDescription

from .graph import build_branched_graph, build_graph
from .utils import NetworkSummary, format_count, summarize_network


@dataclass
class GraphBuild:
    root: GraphNode
    rows: Rows
    summary: NetworkSummary


def build_network_graph(desc: ModelDescription) -> GraphBuild:
    if desc.is_branched:
        root = build_branched_graph(desc.layers)
    else:
        root = build_graph(desc.layers)
    rows = assign_layers(root)
    return GraphBuild(root=root, rows=rows, summary=summarize_network(rows))


__all__ = [
    "build_graph",
    "build_branched_graph",
    "build_network_graph",
    "GraphBuild",
    "NetworkSummary",
    "format_count",
    "summarize_network",
]
