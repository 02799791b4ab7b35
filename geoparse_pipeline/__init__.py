"""
Geoparsing pipeline.

Extracts place, person and organization mentions from text, resolves each
place to a gazetteer record with a chain of disambiguation passes, and ranks
the countries, states and cities the text is about.
"""

__all__ = [
    "PipelineConfig",
    "GeoParser",
]

__version__ = "0.1.0"

from .config import PipelineConfig  # noqa: E402
from .pipeline import GeoParser  # noqa: E402
