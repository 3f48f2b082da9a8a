"""n8n-validate command line."""

from .input_reader import classify_input, read_input
from .main import build_parser, main
from .output import output_summary

__all__ = ["main", "build_parser", "classify_input", "read_input", "output_summary"]
