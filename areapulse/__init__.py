"""
AreaPulse - Business density intelligence on top of Google Places Area Insights.
"""

__version__ = "0.1.0"
