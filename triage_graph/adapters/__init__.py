"""
Outbound Adapters
"""
from .json_exporter import export_insights_json

__all__ = ["export_insights_json"]
