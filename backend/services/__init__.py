"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_generator import DiffGenerator, diff_and_annotate
from .exceptions import EditSuggestionError, MalformedAnnotation, MarkerCollision
from .line_differ import diff_lines
from .llm_service import LLMService, suggest_edit
from .merge_annotator import annotate, find_marker_lines
from .region_extractor import extract_regions
from .workspace import WorkspaceService

__all__ = [
    "ConfigManager",
    "DiffGenerator",
    "diff_and_annotate",
    "diff_lines",
    "annotate",
    "extract_regions",
    "EditSuggestionError",
    "MalformedAnnotation",
    "MarkerCollision",
    "find_marker_lines",
    "LLMService",
    "suggest_edit",
    "WorkspaceService",
]
