#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path

from netscope.builders import build_network_graph
from netscope.errors import NetscopeError
from netscope.layout.presentation import describe_node
from netscope.model.api import load_model_file


def main() -> int:
    ap = argparse.ArgumentParser(description="Validate a network description and print its layout rows")
    ap.add_argument("--model", type=str, required=True, help="Path to YAML/JSON model description")
    ap.add_argument("--json", action="store_true", help="Emit summary and rows as JSON")
    args = ap.parse_args()
    path = Path(args.model)
    try:
        desc = load_model_file(path)
        build = build_network_graph(desc)
    except NetscopeError as e:
        print("INVALID\n---")
        print(e)
        return 1

    rows = [[node.name or node.kind.value for node in row] for row in build.rows]
    if args.json:
        print(json.dumps({"summary": build.summary.as_dict(), "rows": rows}, indent=2))
        return 0

    summary = build.summary
    print("VALID\n---")
    print(f"Model: {desc.name or path.stem}")
    print(f"Layers: {summary.layers}")
    print(f"Parameters: {summary.parameters_text}")
    print(f"Input: {summary.input_shape}")
    print(f"Output: {summary.output_shape}")
    print(f"Depth: {summary.depth}")
    print("---")
    for idx, row in enumerate(build.rows):
        labels = []
        for node in row:
            card = describe_node(node)
            labels.append(f"{node.name} [{type(card).__name__}]")
        print(f"row {idx}: " + ", ".join(labels))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
