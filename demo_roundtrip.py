#!/usr/bin/env python3
"""
Round-Trip Demo: Document → .adi → Document → YAML

Shows the full workflow:
1. Build an example contact log
2. Encode it to .adi text
3. Parse the text back
4. Dump the parsed log as YAML
"""

import sys

from adifkit import EncodeLayout, encode, parse, parse_file, save_adi_file
from adifkit.examples import build_example_log
from adifkit.serialization import document_to_yaml


def main():
    print("=" * 80)
    print("ROUND-TRIP DEMO: Document → .adi → Document → YAML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build or load a log
    # =========================================================================
    print("\n1. LOADING LOG...")
    if len(sys.argv) > 1:
        log = parse_file(sys.argv[1])
        print(f"   ✓ Parsed {sys.argv[1]}")
    else:
        log = build_example_log(contact_count=4)
        print("   ✓ Built example log")
    print(f"   ✓ Header fields: {len(log.header)}")
    print(f"   ✓ Records: {len(log.records)}")

    # =========================================================================
    # STEP 2: Encode
    # =========================================================================
    print("\n2. ENCODING...")
    text = encode(log, layout=EncodeLayout.LINES, preamble="Generated by adifkit demo",
                  field_order=["CALL", "QSO_DATE", "TIME_ON"])
    lines = text.split("\n")
    for line in lines[:12]:
        print(f"   {line}")
    if len(lines) > 12:
        print(f"   ... ({len(lines) - 12} more lines)")

    # =========================================================================
    # STEP 3: Parse back
    # =========================================================================
    print("\n3. PARSING BACK...")
    restored = parse(text)
    print(f"   ✓ Round trip equal: {restored == log}")

    save_adi_file(log, "demo_log.adi", layout=EncodeLayout.LINES)
    print("   ✓ Saved demo_log.adi")

    # =========================================================================
    # STEP 4: YAML view
    # =========================================================================
    print("\n4. YAML VIEW OF FIRST RECORD:")
    print("-" * 80)
    restored.records = restored.records[:1]
    print(document_to_yaml(restored))

    print("=" * 80)


if __name__ == "__main__":
    main()
