"""Core logic for the JSON/JSON5 Schema Visualizer.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- flatten parsed documents into per-node property records
- order records by structural path
- look up property descriptions in a reference schema
- build schema tables, trees and summaries
"""
from .descriptions import annotate, describe
from .flattening import flatten
from .records import PropertyRecord
from .sorting import compare_paths, sort_by_path

__all__ = [
    "PropertyRecord",
    "annotate",
    "compare_paths",
    "describe",
    "flatten",
    "sort_by_path",
]
