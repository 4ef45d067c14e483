"""
Export a machine-readable manifest of the drop rules and update engine_manifest.json.
Run with your Python interpreter. Keeps the manifest at the project root, where the
server picks it up.
"""
from __future__ import annotations
import json
import os
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.dirname(ROOT)
MANIFEST_PATH = os.path.join(ROOT, 'engine_manifest.json')
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from dropchess.manifest import build_manifest


def write_manifest(path: str = MANIFEST_PATH) -> dict:
    manifest = build_manifest()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(manifest, f, indent=2)
    return manifest


def main():
    path = sys.argv[1] if len(sys.argv) >= 2 else MANIFEST_PATH
    write_manifest(path)
    print(f"Updated {path}")


if __name__ == '__main__':
    main()
