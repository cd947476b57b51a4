"""Component export feature.

Public API:
    ExportWorkflow - Category and component selection, then sf CLI retrieve
"""

from .workflow import ExportWorkflow

__all__ = ["ExportWorkflow"]
