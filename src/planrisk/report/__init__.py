"""Report generation module - read-only output surfaces for planrisk results."""

from .github import format_github_comment, post_pr_comment
from .markdown import generate_markdown, render_markdown

__all__ = [
    "format_github_comment",
    "post_pr_comment",
    "generate_markdown",
    "render_markdown",
]
