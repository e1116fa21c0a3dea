"""
JSON Insights Exporter

Serializes Insights for robot (automation) consumers. Key order follows
Insights.to_dict, so identical input produces identical text.
"""

import json
from typing import Optional

from triage_graph.analysis.insights import Insights


def export_insights_json(
    insights: Insights,
    output_path: Optional[str] = None,
    include_stats: bool = False,
    indent: Optional[int] = 2,
) -> str:
    """
    Render *insights* as JSON text, optionally writing it to *output_path*.

    Returns the JSON text.
    """
    text = json.dumps(insights.to_dict(include_stats=include_stats), indent=indent)
    if output_path is not None:
        with open(output_path, "w") as f:
            f.write(text)
    return text
