"""
Application Services
"""
from .insights_service import InsightsService

__all__ = ["InsightsService"]
