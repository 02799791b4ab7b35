from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from geoparse_pipeline.disambiguation.passes import DEFAULT_PASSES


@dataclass
class ComponentConfig:
    """Generic component configuration."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineConfig:
    """Top-level pipeline configuration."""

    extractor: ComponentConfig
    gazetteer: ComponentConfig
    focus_strategy: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="frequency")
    )
    passes: List[str] = field(default_factory=lambda: list(DEFAULT_PASSES))
    max_results: int = 10
    fuzzy: bool = False
    max_sweeps: int = 1

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PipelineConfig":
        def build(section: str) -> Optional[ComponentConfig]:
            if section not in data or data[section] is None:
                return None
            entry = data[section]
            return ComponentConfig(name=entry["name"], params=entry.get("params", {}))

        if build("gazetteer") is None:
            raise ValueError("Pipeline config requires a 'gazetteer' section.")

        return PipelineConfig(
            extractor=build("extractor") or ComponentConfig(name="spacy"),
            gazetteer=build("gazetteer"),  # type: ignore[arg-type]
            focus_strategy=build("focus_strategy") or ComponentConfig(name="frequency"),
            passes=list(data.get("passes") or DEFAULT_PASSES),
            max_results=data.get("max_results", 10),
            fuzzy=data.get("fuzzy", False),
            max_sweeps=data.get("max_sweeps", 1),
        )
