"""
Tests for InsightsService and the JSON exporter

Covers:
    - End-to-end request from work items to insights
    - Configured vs explicit limits
    - Self-loop setting reaching the builder
    - Robot JSON output
"""

import json

import pytest

from triage_graph import AnalysisSettings, Dependency, InsightsService, WorkItem
from triage_graph.adapters import export_insights_json


@pytest.fixture
def tracker_items():
    """
    A small tracker:
        bv-1 (epic) <- bv-2, bv-3 (parent-child)
        bv-2 blocks bv-4, bv-3 blocks bv-4, bv-4 blocks bv-5
        bv-6 relates to bv-1 only
    """
    return [
        WorkItem("bv-1", title="Epic", issue_type="epic"),
        WorkItem("bv-2", title="API", dependencies=[Dependency("bv-2", "bv-1", "parent-child")]),
        WorkItem("bv-3", title="UI", dependencies=[Dependency("bv-3", "bv-1", "parent-child")]),
        WorkItem("bv-4", title="Integrate", status="blocked", dependencies=[
            Dependency("bv-4", "bv-2", "blocks"),
            Dependency("bv-4", "bv-3", "blocks"),
        ]),
        WorkItem("bv-5", title="Release", dependencies=[Dependency("bv-5", "bv-4", "blocks")]),
        WorkItem("bv-6", title="Notes", dependencies=[Dependency("bv-6", "bv-1", "related")]),
    ]


class TestInsightsService:
    """Tests for the request facade."""

    def test_analyze(self, tracker_items):
        insights = InsightsService().analyze(tracker_items)
        assert insights.keystones[0].id == "bv-5"
        assert insights.keystones[0].value == 3.0
        assert insights.bottlenecks[0].id == "bv-4"
        assert insights.orphans == ["bv-6"]
        assert insights.cycles == []
        assert insights.stats.node_count == 6
        assert insights.stats.edge_count == 5

    def test_configured_limit(self, tracker_items):
        service = InsightsService(AnalysisSettings(insight_limit=2))
        assert len(service.analyze(tracker_items).keystones) == 2

    def test_explicit_limit_overrides(self, tracker_items):
        service = InsightsService(AnalysisSettings(insight_limit=2))
        assert len(service.analyze(tracker_items, limit=0).keystones) == 6

    def test_extra_dependencies_and_dangling_refs(self, tracker_items):
        extra = [Dependency("bv-1", "bv-5", "blocks"), Dependency("bv-5", "ghost", "blocks")]
        insights = InsightsService().analyze(tracker_items, extra)
        assert insights.cycles == [["bv-1", "bv-2", "bv-4", "bv-5"]]
        assert insights.stats.snapshot.dropped_edges.unknown_endpoint == 1

    def test_self_loop_setting(self):
        items = [WorkItem("a", dependencies=[Dependency("a", "a")])]
        assert InsightsService().analyze(items).cycles == []
        allowing = InsightsService(AnalysisSettings(allow_self_loops=True))
        assert allowing.analyze(items).cycles == [["a"]]

    def test_build_stats_is_lazy(self, tracker_items):
        stats = InsightsService().build_stats(tracker_items)
        assert stats.computed_metrics() == []

    def test_each_request_gets_new_snapshot(self, tracker_items):
        service = InsightsService()
        first = service.analyze(tracker_items)
        second = service.analyze(tracker_items[:3])
        assert first.stats is not second.stats
        assert first.stats.node_count == 6
        assert second.stats.node_count == 3

    def test_logs_summary(self, tracker_items, caplog):
        with caplog.at_level("INFO", logger="triage_graph.services.insights_service"):
            InsightsService().analyze(tracker_items)
        assert "6 nodes, 5 structural edges" in caplog.text


class TestJsonExporter:
    """Tests for robot JSON output."""

    def test_export_text(self, tracker_items):
        insights = InsightsService().analyze(tracker_items, limit=3)
        data = json.loads(export_insights_json(insights))
        assert list(data) == [
            "bottlenecks", "keystones", "influencers", "hubs",
            "authorities", "orphans", "cycles", "cluster_density",
        ]
        assert data["keystones"][0] == {"id": "bv-5", "value": 3.0}

    def test_export_is_stable(self, tracker_items):
        service = InsightsService()
        first = export_insights_json(service.analyze(tracker_items), include_stats=True)
        second = export_insights_json(service.analyze(list(reversed(tracker_items))), include_stats=True)
        assert first == second

    def test_export_to_file(self, tracker_items, tmp_path):
        insights = InsightsService().analyze(tracker_items)
        out = tmp_path / "insights.json"
        text = export_insights_json(insights, output_path=str(out))
        assert out.read_text() == text
        assert json.loads(text)["orphans"] == ["bv-6"]
