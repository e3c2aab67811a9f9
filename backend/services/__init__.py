"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_parser import DiffParseError, parse_file_diffs
from .diff_serializer import render_file_diffs
from .logging_setup import setup_logging
from .noise_filter import NoiseFilter, collect_stats, normalize_lines
from .replacements import REPLACEMENTS, apply_replacements

__all__ = [
    "ConfigManager",
    "DiffParseError",
    "parse_file_diffs",
    "render_file_diffs",
    "setup_logging",
    "NoiseFilter",
    "collect_stats",
    "normalize_lines",
    "REPLACEMENTS",
    "apply_replacements",
]
