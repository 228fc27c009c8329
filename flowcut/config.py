"""Configuration classes for flowcut components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for the max-flow engine."""

    # Emit one DEBUG record per augmenting path found
    log_augmenting_paths: bool = True


@dataclass
class ReportConfig:
    """Configuration for text reports produced by ``flowcut.report``."""

    # Joins node labels when printing an augmenting path
    path_separator: str = " -> "

    # Minimum width of every ASCII table column
    table_min_width: int = 8

    # Cells longer than this are clipped with "..." (None disables clipping)
    max_col_width: Optional[int] = None

    def format_path(self, labels: list) -> str:
        """Join path labels with the configured separator."""
        return self.path_separator.join(str(label) for label in labels)


# Global configuration instances
ENGINE_CONFIG = EngineConfig()
REPORT_CONFIG = ReportConfig()
