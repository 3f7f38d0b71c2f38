"""Matching module."""

from .matcher import find_entry, match, split_fragments

__all__ = ["match", "find_entry", "split_fragments"]
