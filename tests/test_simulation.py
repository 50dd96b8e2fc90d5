"""Tests for the simulation driver and its report.

The driver runs every policy against one workload, records one outcome
per policy, and logs what happened.  A policy that fails with
``MemoryError`` becomes a failed outcome instead of aborting the run.
"""

from unittest.mock import patch

import pytest

from py_disksim.config import DiskConfig
from py_disksim.disk import Direction, DiskRangeError, SCANPolicy, total_movement
from py_disksim.logging import LogLevel
from py_disksim.simulation import Simulation, WorkloadTooLargeError, format_report

_REF_REQUESTS = [2150, 3904, 986, 2774, 1431]
_REF_HEAD = 2546
_REF_MOVEMENTS = {"FCFS": 8199, "SCAN": 6466, "C-SCAN": 9602}
_SEED = 42


class TestSimulationRun:
    """Verify the driver runs every policy."""

    def test_reference_movements(self) -> None:
        """The reference scenario reports one total per policy."""
        simulation = Simulation()
        report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        assert report.movements() == _REF_MOVEMENTS

    def test_policy_order(self) -> None:
        """Policies run in the order FCFS, SCAN, C-SCAN."""
        simulation = Simulation()
        report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.INWARD)
        assert [r.policy for r in report.outcomes] == ["FCFS", "SCAN", "C-SCAN"]

    def test_outcome_lookup(self) -> None:
        """outcome() finds a policy by name and carries its trace."""
        simulation = Simulation()
        report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        cscan = report.outcome("C-SCAN")
        assert cscan.ok
        assert cscan.trace == [2774, 3904, 4999, 0, 986, 1431, 2150]
        with pytest.raises(KeyError):
            report.outcome("SSTF")

    def test_requests_not_mutated(self) -> None:
        """The caller's request list keeps its arrival order."""
        requests = list(_REF_REQUESTS)
        Simulation().run(requests, head=_REF_HEAD, direction=Direction.OUTWARD)
        assert requests == _REF_REQUESTS

    def test_empty_workload(self) -> None:
        """An empty workload is valid and costs nothing."""
        report = Simulation().run([], head=_REF_HEAD, direction=Direction.OUTWARD)
        assert set(report.movements().values()) == {0}

    def test_out_of_range_rejected_before_running(self) -> None:
        """An off-disk head is rejected and nothing is logged as a result."""
        simulation = Simulation(DiskConfig(cylinders=100))
        with pytest.raises(DiskRangeError):
            simulation.run([10], head=100, direction=Direction.OUTWARD)
        assert simulation.logger.entries == []

    def test_always_to_boundary_config(self) -> None:
        """The configuration switches the sweeping policies to classic mode."""
        config = DiskConfig(always_to_boundary=True)
        report = Simulation(config).run([3000], head=_REF_HEAD, direction=Direction.OUTWARD)
        expected_cscan = (4999 - _REF_HEAD) + 4999
        assert report.outcome("C-SCAN").movement == expected_cscan

    @pytest.mark.parametrize("direction", list(Direction))
    def test_movement_is_trace_length(self, direction: Direction) -> None:
        """Each outcome's total is the distance walked along its trace."""
        report = Simulation().run(_REF_REQUESTS, head=_REF_HEAD, direction=direction)
        for result in report.outcomes:
            assert result.movement == total_movement(result.trace, head=_REF_HEAD)

    def test_run_over_limit_rejected(self) -> None:
        """More than max_requests requests is refused before anything runs."""
        simulation = Simulation(DiskConfig(max_requests=4))
        with pytest.raises(WorkloadTooLargeError, match="exceeds the limit of 4"):
            simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        assert simulation.logger.entries == []


class TestSimulationFailures:
    """A MemoryError in one policy becomes a failed outcome."""

    def test_memory_error_recorded(self) -> None:
        """The failing policy has no movement and an error message."""
        simulation = Simulation()
        with patch.object(SCANPolicy, "schedule", side_effect=MemoryError):
            report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        scan = report.outcome("SCAN")
        assert not scan.ok
        assert scan.movement is None
        assert scan.error == "out of memory"

    def test_other_policies_still_run(self) -> None:
        """The remaining policies still report their totals."""
        simulation = Simulation()
        with patch.object(SCANPolicy, "schedule", side_effect=MemoryError):
            report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        assert report.outcome("FCFS").movement == _REF_MOVEMENTS["FCFS"]
        assert report.outcome("C-SCAN").movement == _REF_MOVEMENTS["C-SCAN"]

    def test_failure_logged_as_error(self) -> None:
        """An ERROR entry names the failing policy."""
        simulation = Simulation()
        with patch.object(SCANPolicy, "schedule", side_effect=MemoryError):
            simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        errors = simulation.logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert errors[0].policy == "SCAN"


class TestSimulationLogging:
    """The driver logs each run; the policies never do."""

    def test_run_and_results_logged(self) -> None:
        """One INFO entry for the run and one per policy."""
        simulation = Simulation()
        simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        info = simulation.logger.filter(min_level=LogLevel.INFO)
        expected_entries = 4
        assert len(info) == expected_entries
        assert "head=2546" in info[0].message
        assert info[1].policy == "FCFS"
        assert "8199" in info[1].message

    def test_generate_logged_at_debug(self) -> None:
        """Workload generation is a DEBUG event."""
        simulation = Simulation(DiskConfig(seed=_SEED))
        simulation.generate()
        assert simulation.logger.entries[0].level is LogLevel.DEBUG

    def test_generate_out_of_memory_logged_and_raised(self) -> None:
        """A MemoryError while generating is logged at ERROR and re-raised."""
        simulation = Simulation()
        with (
            patch("py_disksim.simulation.generate_requests", side_effect=MemoryError),
            pytest.raises(MemoryError),
        ):
            simulation.generate(5)
        errors = simulation.logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert "generating 5 requests" in errors[0].message


class TestWorkloadGeneration:
    """The driver generates workloads from its configuration."""

    def test_default_size(self) -> None:
        """generate() produces request_count requests on the disk."""
        config = DiskConfig(cylinders=100, request_count=12, seed=_SEED)
        requests = Simulation(config).generate()
        expected_count = 12
        assert len(requests) == expected_count
        assert all(0 <= r < config.cylinders for r in requests)

    def test_seeded_is_reproducible(self) -> None:
        """Two simulations with the same seed see the same workload."""
        first = Simulation(DiskConfig(seed=_SEED)).generate()
        second = Simulation(DiskConfig(seed=_SEED)).generate()
        assert first == second

    def test_explicit_count(self) -> None:
        """An explicit count overrides the configuration."""
        requests = Simulation(DiskConfig(seed=_SEED)).generate(3)
        expected_count = 3
        assert len(requests) == expected_count

    def test_count_over_limit_rejected(self) -> None:
        """A count above max_requests never reaches the generator."""
        simulation = Simulation(DiskConfig(max_requests=10))
        with (
            patch("py_disksim.simulation.generate_requests") as generate,
            pytest.raises(WorkloadTooLargeError),
        ):
            simulation.generate(11)
        generate.assert_not_called()


class TestReport:
    """Verify the text and JSON views of a report."""

    def test_format_report_sections(self) -> None:
        """The text report has a section and a total for each policy."""
        report = Simulation().run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        text = format_report(report)
        assert "Initial head position: 2546" in text
        assert "Outward (toward higher cylinders)" in text
        assert "[FCFS] Total head movement: 8199 cylinders" in text
        assert "[SCAN] Total head movement: 6466 cylinders" in text
        assert "[C-SCAN] Total head movement: 9602 cylinders" in text
        assert "Formula: Total = sum of |next - current|" in text

    def test_format_report_inward_formula(self) -> None:
        """Inward runs print the inward formulas."""
        report = Simulation().run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.INWARD)
        text = format_report(report)
        assert "Inward (toward lower cylinders)" in text
        assert "(initial - 0) + (max - 0)" in text

    def test_format_report_failure(self) -> None:
        """A failed policy prints its error instead of a total."""
        simulation = Simulation()
        with patch.object(SCANPolicy, "schedule", side_effect=MemoryError):
            report = simulation.run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        assert "[SCAN] Failed: out of memory" in format_report(report)

    def test_to_dict(self) -> None:
        """The JSON view lists the workload and every result."""
        report = Simulation().run(_REF_REQUESTS, head=_REF_HEAD, direction=Direction.OUTWARD)
        data = report.to_dict()
        assert data["direction"] == "outward"
        assert data["requests"] == _REF_REQUESTS
        results = data["results"]
        assert isinstance(results, list)
        assert {r["policy"]: r["movement"] for r in results} == _REF_MOVEMENTS
