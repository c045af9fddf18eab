"""
Service Layer - FileSelectionService.
"""

from filescope.services.file_selection_service import (
    FileSelectionService,
    SelectionReport,
    ToolSelection,
)

__all__ = [
    "FileSelectionService",
    "SelectionReport",
    "ToolSelection",
]
