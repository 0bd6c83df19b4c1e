"""
Tests for the JSON project store and the optimize request.
"""

import json

import pytest

from src.core.config import EngineConfig
from src.core.data_models import NO_FEASIBLE_SYSTEM, OptimizationResults, ProjectInput
from src.store.project_store import JsonProjectStore, ProjectNotFoundError, optimize


@pytest.fixture
def store(tmp_path):
    return JsonProjectStore(tmp_path / "projects")


class TestJsonProjectStore:
    def test_create_and_get(self, store, parking_bay, default_costs):
        project_id = store.create(parking_bay, default_costs)
        record = store.get(project_id)
        assert record.project == parking_bay
        assert record.costs == default_costs
        assert record.results is None
        assert record.created_at == record.updated_at > 0

    def test_missing_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            store.get("does-not-exist")

    def test_patch_results(self, store, parking_bay, default_costs, sample_results):
        project_id = store.create(parking_bay, default_costs)
        created = store.get(project_id).created_at
        store.patch_results(project_id, sample_results, created + 5)

        record = store.get(project_id)
        assert record.updated_at == created + 5
        assert record.created_at == created
        assert record.results.optimal_system == "flat_plate"
        assert record.results.to_dict() == sample_results.to_dict()

    def test_patch_missing_project(self, store, sample_results):
        with pytest.raises(ProjectNotFoundError):
            store.patch_results("nope", sample_results, 1)

    def test_list_newest_first(self, store, parking_bay, default_costs):
        first = store.create(parking_bay, default_costs)
        second = store.create(parking_bay, default_costs)
        store.patch_results(first, OptimizationResults(), 10 ** 13)
        assert [r.project_id for r in store.list()] == [first, second]

    def test_no_temp_files_left(self, store, parking_bay, default_costs):
        store.create(parking_bay, default_costs)
        assert not list(store.root.glob(".tmp-*"))

    def test_record_shape(self, store, parking_bay, default_costs):
        project_id = store.create(parking_bay, default_costs)
        data = json.loads((store.root / f"{project_id}.json").read_text(encoding="utf-8"))
        assert set(data) >= {"project", "cost_parameters", "optimization_results"}
        assert data["optimization_results"] is None


class TestOptimize:
    def test_optimize_patches_results(self, store, parking_bay, default_costs, narrow_ranges):
        project_id = store.create(parking_bay, default_costs)
        config = EngineConfig(reference_spans=(30.0,))
        results = optimize(project_id, store, config, ranges=narrow_ranges)

        record = store.get(project_id)
        assert record.results.to_dict() == results.to_dict()
        assert record.results.optimal_system != NO_FEASIBLE_SYSTEM
        assert record.updated_at >= record.created_at

    def test_optimize_missing_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            optimize("missing", store)

    def test_no_feasible_design_is_stored(self, store, default_costs, empty_ranges):
        project_id = store.create(ProjectInput(bay_length=30.0, bay_width=30.0), default_costs)
        optimize(project_id, store, EngineConfig(reference_spans=(30.0,)), ranges=empty_ranges)
        assert store.get(project_id).results.optimal_system == NO_FEASIBLE_SYSTEM
