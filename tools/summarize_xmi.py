#!/usr/bin/env python3
"""
Print a summary of an EA XMI export: class/property/association counts and class ids.

Usage:
  python tools/summarize_xmi.py path/to/model.xml [--encoding windows-1252] [--class NAME]
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from adapters.ea_xmi import EaXmiParser  # noqa: E402
from core.errors import MalformedInputError  # noqa: E402


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("xmi_path")
    ap.add_argument("--encoding", default=None)
    ap.add_argument("--class", dest="class_name", default=None, help="print the properties of one class")
    args = ap.parse_args(argv)

    if not os.path.isfile(args.xmi_path):
        print(f"File not found: {args.xmi_path}")
        return 2

    try:
        model = EaXmiParser(encoding=args.encoding).parse(args.xmi_path)
    except MalformedInputError as e:
        print(f"XML parse error: {e}")
        return 3

    if args.class_name:
        umlclass = model.get_class_by_name(args.class_name)
        if umlclass is None:
            print(f"Class not found: {args.class_name}")
            return 4
        print(f"{umlclass.id}  {'.'.join(umlclass.package_path)}  {umlclass.name}")
        for prop in umlclass.sorted_properties():
            type_name = prop.type.name if prop.type is not None else (prop.primitive_type or "?")
            print(f"  {prop.name}  {prop.lower or ''}..{prop.upper or ''}  {type_name}")
        return 0

    for key, value in model.statistics().items():
        print(f"{key.capitalize()}: {value}")
    for umlclass in model.sorted_classes():
        print(f"{umlclass.id}  {'.'.join(umlclass.package_path)}  {umlclass.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
