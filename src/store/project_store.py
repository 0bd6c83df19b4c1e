"""
Project persistence and the optimize request.

A ProjectStore reads a project (bay geometry and unit costs) and patches
its optimization results. JsonProjectStore keeps one JSON document per
project in a directory.
"""

import json
import logging
import os
import tempfile
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.config import EngineConfig
from ..core.data_models import CostParameters, OptimizationResults, ProjectInput
from ..search.comparator import compute_optimization
from ..search.grid import SearchRanges

logger = logging.getLogger(__name__)


class ProjectNotFoundError(KeyError):
    """No project is stored under the requested id"""


def now_ms() -> int:
    """Wall-clock timestamp in milliseconds"""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ProjectRecord:
    project_id: str
    project: ProjectInput
    costs: CostParameters
    results: Optional[OptimizationResults] = None
    created_at: int = 0     # ms
    updated_at: int = 0     # ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "project": self.project.to_dict(),
            "cost_parameters": self.costs.to_dict(),
            "optimization_results": self.results.to_dict() if self.results else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectRecord":
        results = data.get("optimization_results")
        return cls(
            project_id=data["project_id"],
            project=ProjectInput.from_dict(data["project"]),
            costs=CostParameters.from_dict(data["cost_parameters"]),
            results=OptimizationResults.from_dict(results) if results else None,
            created_at=data.get("created_at", 0),
            updated_at=data.get("updated_at", 0),
        )


class ProjectStore(ABC):
    """Read/patch interface used by optimize()"""

    @abstractmethod
    def get(self, project_id: str) -> ProjectRecord:
        """Fetch a project, raising ProjectNotFoundError if absent"""

    @abstractmethod
    def patch_results(self, project_id: str, results: OptimizationResults, updated_at: int) -> None:
        """Replace the stored results and the update timestamp"""


class JsonProjectStore(ProjectStore):
    """One <project_id>.json file per project under a directory"""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, project_id: str) -> Path:
        return self.root / f"{project_id}.json"

    def create(self, project: ProjectInput, costs: CostParameters) -> str:
        project_id = uuid.uuid4().hex
        timestamp = now_ms()
        self._write(ProjectRecord(project_id, project, costs, None, timestamp, timestamp))
        logger.info(f"Created project {project_id} ({project.name})")
        return project_id

    def get(self, project_id: str) -> ProjectRecord:
        path = self._path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(project_id)
        with open(path, "r", encoding="utf-8") as f:
            return ProjectRecord.from_dict(json.load(f))

    def list(self) -> List[ProjectRecord]:
        """All stored projects, most recently updated first"""
        records = []
        for path in sorted(self.root.glob("*.json")):
            with open(path, "r", encoding="utf-8") as f:
                records.append(ProjectRecord.from_dict(json.load(f)))
        return sorted(records, key=lambda r: r.updated_at, reverse=True)

    def patch_results(self, project_id: str, results: OptimizationResults, updated_at: int) -> None:
        record = self.get(project_id)
        self._write(replace(record, results=results, updated_at=updated_at))
        logger.info(f"Saved optimization results for project {project_id}")

    def _write(self, record: ProjectRecord) -> None:
        # Write to a temp file in the same directory then rename over the target
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record.to_dict(), f, indent=2)
            os.replace(tmp, self._path(record.project_id))
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise


def optimize(
    project_id: str,
    store: ProjectStore,
    config: Optional[EngineConfig] = None,
    ranges: Optional[SearchRanges] = None,
) -> OptimizationResults:
    """Fetch a project, run the optimization and patch the results back"""
    record = store.get(project_id)
    project = record.project
    results = compute_optimization(
        project.bay_length,
        project.bay_width,
        record.costs,
        config=config,
        ranges=ranges,
        project=project,
    )
    store.patch_results(project_id, results, now_ms())
    return results
