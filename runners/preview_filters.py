#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path

from netscope.errors import NetscopeError
from netscope.ir.types import LayerRecord
from netscope.model.api import load_model_file
from netscope.preview.filters import FilterPreview, PreviewConfig
from netscope.preview.images import decode_image, save_image


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview a conv layer's filters on an image")
    parser.add_argument("--model", required=True, type=Path, help="Path to model description")
    parser.add_argument("--layer", required=True, type=str, help="Layer name or index")
    parser.add_argument("--image", type=Path, default=None, help="Image to run the filters over")
    parser.add_argument("--out", type=Path, default=Path("preview"))
    parser.add_argument("--constant-value", type=float, default=0.5)
    args = parser.parse_args()

    try:
        desc = load_model_file(args.model)
        layer = desc.layer(args.layer)
        record = LayerRecord.from_descriptor(layer)
        if not record.kind.is_convolution:
            print(f"Layer '{layer.name}' is {record.kind.value}, not a convolution")
            return 1
        preview = FilterPreview(record, config=PreviewConfig(constant_value=args.constant_value))
        if args.image is not None:
            print(f"[netscope] previewing {len(record.weights)} filters on {args.image}", flush=True)
            preview.preview(decode_image(args.image))
        rendered = preview.rendered()
        for idx, tensor in enumerate(rendered):
            save_image(tensor, args.out / f"filter_{idx}.png")
    except (NetscopeError, KeyError, IndexError) as e:
        print("INVALID\n---")
        print(e)
        return 1

    print(f"Wrote {len(rendered)} images to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
