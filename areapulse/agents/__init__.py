"""
Agent-facing tools.

Example:
    from areapulse.agents import get_area_insights

    tools = [get_area_insights]
"""

from areapulse.agents.tools import get_area_insights

__all__ = ["get_area_insights"]
