"""
Transformation Orchestrator.
"""

from ktbridge.core.engine import TransformEngine, render_extension
from ktbridge.core.transform_result import TransformResult

__all__ = ["TransformEngine", "TransformResult", "render_extension"]
