"""Render package: spacing model, selective renderer and output writer."""

from .output import DocWriter
from .renderer import BODY_MARKER, Renderer, render_pub_member
from .spacing import format_tokens

__all__ = [
    "DocWriter",
    "BODY_MARKER",
    "Renderer",
    "render_pub_member",
    "format_tokens",
]
