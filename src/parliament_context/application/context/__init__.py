"""Prompt and citation assembly."""

from .assembler import ContextAssembler, make_snippet

__all__ = ["ContextAssembler", "make_snippet"]
