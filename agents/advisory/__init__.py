# agents/advisory/__init__.py
"""
Advisory agent package
"""

from .agent import AdvisoryAgent
from .models import CropAdvisory, Priority

__all__ = ["AdvisoryAgent", "CropAdvisory", "Priority"]
