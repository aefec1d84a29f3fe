"""Value map construction."""

from .loader import build_values, load_value_file, merge_values, parse_set_override

__all__ = ["build_values", "load_value_file", "merge_values", "parse_set_override"]
