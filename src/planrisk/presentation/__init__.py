"""Presentation layer - human-friendly formatting."""

from .human_formatter import format_human_friendly, format_money
from .summary import generate_summary

__all__ = ["format_human_friendly", "format_money", "generate_summary"]
