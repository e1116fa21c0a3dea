"""
Configuration Package

Engine settings loaded from defaults or the environment.
"""

from .settings import AnalysisSettings

__all__ = [
    "AnalysisSettings",
]
