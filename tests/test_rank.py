import pytest

from heftsched.errors import NoFeasibleSite, RuntimeUnavailable
import heftsched.catalogs as cts
import heftsched.schedulers as sch
import heftsched.sites as sts
import heftsched.workflows as wfs


@pytest.fixture
def annotator_factory(catalog_factory, site_catalog_factory):

    def _make(runtimes, capacities, cost=2.5):
        catalog = catalog_factory(runtimes)
        registry = sts.SiteRegistry(
            sites=list(capacities.keys()),
            capacity_provider=site_catalog_factory(capacities),
        )
        return sch.RankAnnotator(
            site_lookup=catalog,
            runtime_lookup=catalog,
            registry=registry,
            average_communication_cost=cost,
        )

    return _make


def test_average_compute_time_is_capacity_weighted(annotator_factory,
                                                   task_factory):
    annotator = annotator_factory(
        runtimes={"t": {"x": 10, "y": 40}},
        capacities={"x": 4, "y": 1},
    )

    assert annotator.average_compute_time(task_factory("t")) == 16.0


def test_average_compute_time_ignores_unconfigured_sites(annotator_factory,
                                                         task_factory):
    annotator = annotator_factory(
        runtimes={"t": {"x": 10, "elsewhere": 1000}},
        capacities={"x": 4},
    )

    assert annotator.average_compute_time(task_factory("t")) == 10.0


def test_average_compute_time_without_sites_raises(annotator_factory,
                                                   task_factory):
    annotator = annotator_factory(
        runtimes={"t": {"elsewhere": 10}},
        capacities={"x": 1},
    )

    with pytest.raises(NoFeasibleSite):
        annotator.average_compute_time(task_factory("t"))
    with pytest.raises(NoFeasibleSite):
        annotator.average_compute_time(task_factory("t"), sites=[])


def test_average_compute_time_with_bad_runtime_raises(annotator_factory,
                                                      task_factory):
    annotator = annotator_factory(
        runtimes={"t": {"x": 10, "y": 0}},
        capacities={"x": 1, "y": 1},
    )

    with pytest.raises(RuntimeUnavailable):
        annotator.average_compute_time(task_factory("t"))


def test_downward_rank_takes_maximum_over_parents(annotator_factory,
                                                  graph_factory,
                                                  task_factory):
    annotator = annotator_factory(
        runtimes={"a": {"x": 10}, "b": {"x": 100}, "c": {"x": 1}},
        capacities={"x": 1},
        cost=2.5,
    )
    graph = graph_factory(["a", "b", "c"], [("a", "c"), ("b", "c")])
    root = wfs.Node(task_factory("root"))

    with graph.synthetic_root(root):
        ranked = annotator.annotate(workflow=graph, root=root)

    assert [n.id for n in ranked] == ["a", "b", "c"]
    assert root.annotation.downward_rank == 0.0
    assert root.annotation.avg_compute_time == 0.0

    a, b, c = (graph.get_node(i) for i in "abc")
    assert a.annotation.downward_rank == 2.5
    assert b.annotation.downward_rank == 2.5
    # max(2.5 + 10 + 2.5, 2.5 + 100 + 2.5)
    assert c.annotation.downward_rank == 105.0


def test_downward_rank_along_chain(annotator_factory, graph_factory,
                                   task_factory):
    annotator = annotator_factory(
        runtimes={"a": {"x": 10}, "b": {"x": 20}, "c": {"x": 30}},
        capacities={"x": 2},
        cost=1.0,
    )
    graph = graph_factory(["a", "b", "c"], [("a", "b"), ("b", "c")])
    root = wfs.Node(task_factory("root"))

    with graph.synthetic_root(root):
        annotator.annotate(workflow=graph, root=root)

    ranks = [graph.get_node(i).annotation.downward_rank for i in "abc"]
    assert ranks == [1.0, 12.0, 33.0]


def test_rank_of_parentless_node_is_zero(annotator_factory, task_factory):
    annotator = annotator_factory(runtimes={}, capacities={"x": 1})

    assert annotator.downward_rank(wfs.Node(task_factory("a"))) == 0.0


@pytest.mark.parametrize("runtime", [0, -5, None, 2.5, False])
def test_bad_runtime_from_custom_lookup_raises(catalog_factory,
                                               site_catalog_factory,
                                               task_factory, runtime):

    class FixedRuntime(cts.RuntimeLookup):
        def get_runtime(self, task, site):
            return runtime

    annotator = sch.RankAnnotator(
        site_lookup=catalog_factory({"t": {"x": 10}}),
        runtime_lookup=FixedRuntime(),
        registry=sts.SiteRegistry(
            sites=["x"],
            capacity_provider=site_catalog_factory({"x": 1}),
        ),
        average_communication_cost=2.5,
    )
    task = task_factory("t")

    with pytest.raises(RuntimeUnavailable):
        annotator.get_runtime(task, "x")
    with pytest.raises(RuntimeUnavailable):
        annotator.average_compute_time(task)
