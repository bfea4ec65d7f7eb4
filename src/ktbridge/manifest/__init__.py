"""
Interchange Codec.

Manifest serialization (`encode`/`decode`), merging, and file loading.
"""

from ktbridge.manifest.codec import decode, encode
from ktbridge.manifest.file_loader import find_manifests, merge_files, read_manifest
from ktbridge.manifest.merging import merge, merge_declarations

__all__ = [
  "decode",
  "encode",
  "find_manifests",
  "merge",
  "merge_declarations",
  "merge_files",
  "read_manifest",
]
