"""
CLI Command Handlers Facade.

Re-exports the handlers from `ktbridge.cli.handlers` for the entry point.
"""

from ktbridge.cli.handlers.generate import handle_generate
from ktbridge.cli.handlers.merge import handle_merge
from ktbridge.cli.handlers.preview import handle_preview
from ktbridge.cli.handlers.scan import handle_scan

__all__ = [
  "handle_generate",
  "handle_merge",
  "handle_preview",
  "handle_scan",
]
