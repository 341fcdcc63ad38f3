"""Rule analyzers over the structural model."""

from analysis.annotation import analyze_require_annotation, has_annotation
from analysis.dependency import analyze_forbidden_dependency
from analysis.layering import analyze_layering
from analysis.relation import has_dependency
from analysis.visibility import analyze_visibility

__all__ = [
    "analyze_forbidden_dependency",
    "analyze_layering",
    "analyze_require_annotation",
    "analyze_visibility",
    "has_annotation",
    "has_dependency",
]
