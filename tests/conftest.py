"""
Shared fixtures for heftsched tests
"""

import os
import typing as tp

# Charts are rendered without a display.
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

import heftsched.catalogs as cts
import heftsched.workflows as wfs


NAMESPACE = "test"
VERSION = "1.0"


def make_task(task_id: str, name: tp.Optional[str] = None) -> wfs.Task:
    return wfs.Task(
        id=task_id,
        namespace=NAMESPACE,
        name=name if name is not None else task_id,
        version=VERSION,
    )


@pytest.fixture
def task_factory():
    return make_task


@pytest.fixture
def graph_factory():
    """Build a graph from task ids and (parent, child) edges. Task ids
    double as transformation names."""

    def _make(
            tasks: list[str],
            edges: tp.Iterable[tp.Tuple[str, str]] = (),
            name: str = "test",
    ) -> wfs.WorkflowGraph:
        graph = wfs.WorkflowGraph(name=name)
        for task_id in tasks:
            graph.add_task(make_task(task_id))
        for parent, child in edges:
            graph.add_edge(parent, child)
        return graph

    return _make


@pytest.fixture
def catalog_factory():
    """Build transformation catalog from map transformation name ->
    map site -> runtime."""

    def _make(runtimes: dict[str, dict[str, tp.Any]]) -> cts.TransformationCatalog:
        entries = []
        for name, sites in runtimes.items():
            for site, runtime in sites.items():
                entries.append(cts.TransformationEntry(
                    namespace=NAMESPACE,
                    name=name,
                    version=VERSION,
                    site=site,
                    profiles={"runtime": str(runtime)},
                ))
        return cts.TransformationCatalog(entries=entries)

    return _make


@pytest.fixture
def site_catalog_factory():
    """Build site catalog from map site -> idle nodes."""

    def _make(capacities: dict[str, tp.Any]) -> cts.SiteCatalog:
        sites = {
            name: {
                "handle": name,
                "jobmanagers": [
                    {"universe": "vanilla", "idle-nodes": str(capacity)},
                ],
            }
            for name, capacity in capacities.items()
        }
        return cts.SiteCatalog(sites=sites)

    return _make
