"""InviteCraft - AI-assisted invitation card design."""

__version__ = "0.1.0"

from invitecraft.core.config import InviteCraftConfig, config
from invitecraft.core.layout import Align, LayoutPlan, analyze_layout
from invitecraft.core.palette import keyword_palette
from invitecraft.core.preview import compose_preview

__all__ = [
    "Align",
    "InviteCraftConfig",
    "LayoutPlan",
    "analyze_layout",
    "compose_preview",
    "config",
    "keyword_palette",
]
