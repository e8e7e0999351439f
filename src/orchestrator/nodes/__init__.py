"""Node exports for easy imports."""
from . import extract_details, tier_analysis

__all__ = [
    "extract_details",
    "tier_analysis",
]
