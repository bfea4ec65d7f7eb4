"""
Enumerations for ktbridge.

This module defines the closed set of declaration kinds understood by the
pipeline, and the access levels the Swift generators can emit.
"""

from enum import Enum


class DeclarationKind(str, Enum):
  """
  The kinds of source declarations the bridge can transform.

  The enum value doubles as the section tag in manifest headers
  (e.g. ``[sum:com.example.Result]``).
  """

  SUM = "sum"  # sealed class / sealed interface -> Swift enum
  ASYNC = "async"  # suspend fun -> async (throws) func
  STREAM = "stream"  # Flow<T> fun/val -> AsyncStream<T>


class AccessLevel(str, Enum):
  """Swift access modifiers for generated declarations."""

  PUBLIC = "public"
  INTERNAL = "internal"
  PRIVATE = "private"
