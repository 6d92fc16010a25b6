"""NBA Shot Chart service.

Filtered shot and shooting-statistics queries over a shot record store,
zone aggregation, and hex/grid heatmap binning for court rendering.
"""

from .version import __version__
from .config import AppSettings, get_settings

__all__ = [
    "__version__",
    "AppSettings",
    "get_settings",
    # Key subpackages
    "models",
    "transformers",
    "store",
    "services",
    "api",
    "render",
]
