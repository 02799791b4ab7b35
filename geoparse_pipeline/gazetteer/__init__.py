"""Gazetteers."""

from .jsonl import JSONLGazetteer  # noqa: F401
