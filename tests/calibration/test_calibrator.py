"""
Tests for the Calibrator validation loop.

Uses the fixture network from conftest:
    A --tl--> B --prio--> C --rbl--> F, A --mw--> D --mw--> E
"""

import csv
import json

import pytest

from freespeed.calibration import Calibrator
from freespeed.errors import DegeneratePathError, PathNotFoundError
from freespeed.network import Node, ValidationSample, ValidationSet
from freespeed.schemas import CalibrationRequest

from tests.helpers import make_link, structural_request_json


def structural(factor: float) -> CalibrationRequest:
    return CalibrationRequest(**structural_request_json(factor))


# =============================================================================
# Error Metrics
# =============================================================================

class TestErrorMetrics:
    """Tests for aggregate RMSE / MAE."""

    def test_perfect_prediction(self, calibrator):
        """Targets equal to network speeds give zero error."""
        result = calibrator.evaluate(None)
        assert result.rmse == pytest.approx(0.0, abs=1e-9)
        assert result.mae == pytest.approx(0.0, abs=1e-9)

    def test_known_errors(self, calibrator):
        """
        Factor 0.5 halves urban speeds: A->C and C->F predict 5 m/s
        against 10, A->E stays at 30.
        """
        result = calibrator.evaluate(structural(0.5))
        # squared errors 25, 25, 0
        assert result.rmse == pytest.approx(50 / 3)
        # absolute km/h errors 18, 18, 0
        assert result.mae == pytest.approx(12.0)

    def test_metrics_non_negative(self, calibrator):
        for request in [None, structural(1.5), CalibrationRequest(f=0.75)]:
            result = calibrator.evaluate(request)
            assert result.rmse >= 0
            assert result.mae >= 0

    def test_empty_validation_set(self, graph, mutator, registry, tmp_path):
        calibrator = Calibrator(graph, ValidationSet(), mutator, registry, output_dir=tmp_path)
        result = calibrator.evaluate(None)
        assert result.rmse == 0.0
        assert result.mae == 0.0


# =============================================================================
# Diagnostics
# =============================================================================

class TestDiagnostics:
    """Tests for per-junction-type diagnostic points."""

    def test_points_per_bucket(self, calibrator):
        result = calibrator.evaluate(structural(0.5))
        # A->C crosses tl and prio, C->F crosses rbl
        assert len(result.traffic_light) == 1
        assert len(result.priority) == 1
        assert len(result.right_before_left) == 1

    def test_implied_true_factor(self, calibrator):
        """Predicted 5 m/s vs target 10 m/s: correction 0.5, y_true = 0.5 / 0.5."""
        result = calibrator.evaluate(structural(0.5))
        point = result.traffic_light[0]
        assert point.y_pred == pytest.approx(0.5)
        assert point.y_true == pytest.approx(1.0)

    def test_input_vector(self, calibrator, graph):
        result = calibrator.evaluate(structural(0.5))
        assert result.priority[0].x == graph.links["prio"].diagnostic_input

    def test_motorway_only_path(self, graph, mutator, registry, tmp_path):
        """A pure motorway path counts in the metrics but yields no diagnostics."""
        validation = ValidationSet([ValidationSample("A", "E", 20.0)])
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)

        result = calibrator.evaluate(structural(0.5))

        assert result.diagnostic_counts() == {
            "priority": 0, "right_before_left": 0, "traffic_light": 0,
        }
        assert result.rmse == pytest.approx(100.0)
        assert result.mae == pytest.approx(36.0)

    def test_legacy_mode_has_no_diagnostics(self, calibrator):
        result = calibrator.evaluate(CalibrationRequest(f=0.5))
        assert sum(result.diagnostic_counts().values()) == 0

    def test_baseline_after_structural_has_no_diagnostics(self, calibrator):
        calibrator.evaluate(structural(0.5))
        result = calibrator.evaluate(None)
        assert sum(result.diagnostic_counts().values()) == 0


# =============================================================================
# Idempotence and Routing
# =============================================================================

class TestEvaluate:
    """Tests for evaluate() behaviour across calls."""

    def test_null_request_idempotent(self, calibrator, graph):
        speeds = graph.free_speeds()
        first = calibrator.evaluate(None, "init")
        second = calibrator.evaluate(None, "init")
        assert first.rmse == second.rmse
        assert first.mae == second.mae
        assert graph.free_speeds() == speeds

    def test_router_sees_mutation(self, graph, mutator, registry, tmp_path):
        """
        With urban links slowed down, the fastest A->C route is unchanged
        but its speed drops; a second evaluation re-reads free speeds.
        """
        validation = ValidationSet([ValidationSample("A", "C", 10.0)])
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)

        assert calibrator.evaluate(structural(1.0)).rmse == pytest.approx(0.0)
        assert calibrator.evaluate(structural(0.5)).rmse == pytest.approx(25.0)

    def test_missing_node(self, graph, mutator, registry, tmp_path):
        validation = ValidationSet([ValidationSample("A", "nowhere", 10.0)])
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)
        with pytest.raises(PathNotFoundError):
            calibrator.evaluate(None)

    def test_unreachable_node(self, graph, mutator, registry, tmp_path):
        validation = ValidationSet([ValidationSample("F", "A", 10.0)])
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)
        with pytest.raises(PathNotFoundError):
            calibrator.evaluate(None)

    def test_zero_length_path(self, graph, mutator, registry, tmp_path):
        graph.add_node(Node("G", 1000.0, 1000.0))
        graph.add_link(make_link("stub", "E", "G", 30.0, "motorway", length=0.0))
        validation = ValidationSet([ValidationSample("E", "G", 10.0)])
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)

        with pytest.raises(DegeneratePathError):
            calibrator.evaluate(None)


# =============================================================================
# Side Artifacts
# =============================================================================

class TestArtifacts:
    """Tests for <label>-params.json and <label>-eval.csv."""

    def test_no_label_writes_nothing(self, calibrator, tmp_path):
        calibrator.evaluate(structural(0.5))
        assert list(tmp_path.iterdir()) == []

    def test_params_written(self, calibrator, tmp_path):
        request = structural(0.5)
        calibrator.evaluate(request, "trial")
        path = tmp_path / "trial-params.json"
        assert CalibrationRequest.from_file(path) == request
        assert "f" not in json.loads(path.read_text())

    def test_legacy_params_omit_vectors(self, calibrator, tmp_path):
        calibrator.evaluate(CalibrationRequest(f=0.75), "075")
        data = json.loads((tmp_path / "075-params.json").read_text())
        assert data == {"f": 0.75}

    def test_null_request_writes_no_params(self, calibrator, tmp_path):
        calibrator.evaluate(None, "init")
        assert not (tmp_path / "init-params.json").exists()
        assert (tmp_path / "init-eval.csv").exists()

    def test_eval_csv(self, calibrator, tmp_path):
        calibrator.evaluate(None, "init")

        with open(tmp_path / "init-eval.csv", newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["from_node", "to_node", "beeline_dist", "dist", "travel_time"]
        assert len(rows) == 4
        # A(0,0) -> C(2000,0): 2 km at 10 m/s
        assert rows[1] == ["A", "C", "2000", "2000", "200"]
        # A(0,0) -> E(1000,1000) over the motorway
        assert rows[3] == ["A", "E", "1414", "2000", "66"]

    def test_result_does_not_depend_on_label(self, calibrator):
        labeled = calibrator.evaluate(structural(0.7), "x")
        unlabeled = calibrator.evaluate(structural(0.7))
        assert labeled == unlabeled
