"""
Utility functions for npuzzle.

Text helpers for boards and the space-separated configuration format.
"""

from npuzzle.utils.util import (
    coloring_str,
    format_int_sequence,
    grid_visualize_format,
    parse_int_sequence,
    tile_to_char,
)

__all__ = [
    "coloring_str",
    "format_int_sequence",
    "grid_visualize_format",
    "parse_int_sequence",
    "tile_to_char",
]
