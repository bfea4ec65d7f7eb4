"""
Swift Declaration Generators.

One generator per declaration kind, plus the fixed runtime support source.
"""

from ktbridge.generators.async_function import AsyncFunctionGenerator, trailing_default_count
from ktbridge.generators.base import SwiftGenerator
from ktbridge.generators.enum_generator import EnumGenerator
from ktbridge.generators.stream import StreamGenerator, stream_member_name

__all__ = [
  "AsyncFunctionGenerator",
  "EnumGenerator",
  "StreamGenerator",
  "SwiftGenerator",
  "stream_member_name",
  "trailing_default_count",
]
