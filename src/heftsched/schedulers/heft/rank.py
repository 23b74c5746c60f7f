import typing as tp

from loguru import logger

from heftsched.errors import NoFeasibleSite, RuntimeUnavailable
import heftsched.catalogs as cts
import heftsched.sites as sts
import heftsched.workflows as wfs


class RankAnnotator:
    """Computes average compute time and downward rank for every node
    of a workflow graph.

    The downward rank of node i is

        rank(i) = max over p in pred(i) of ( rank(p) + w(p) + c )

    where w(p) is the capacity weighted average compute time of parent
    p and c is the average communication cost between sites.
    """

    def __init__(
            self,
            site_lookup: cts.FeasibleSiteLookup,
            runtime_lookup: cts.RuntimeLookup,
            registry: sts.SiteRegistry,
            average_communication_cost: float,
    ) -> None:
        self.site_lookup = site_lookup
        self.runtime_lookup = runtime_lookup
        self.registry = registry
        self.average_communication_cost = average_communication_cost

    def feasible_sites(self, task: wfs.Task) -> list[str]:
        """Return configured sites where task can run, in the order of
        site lookup.

        :param task: task to look up.
        :return: list of site names.
        """

        configured = self.registry.get_site_names()
        sites = [site
                 for site in self.site_lookup.get_site_list(task, configured)
                 if site in self.registry]

        if not sites:
            raise NoFeasibleSite(f"No runnable site for job {task.id} "
                                 f"({task.fqdn})")

        return sites

    def get_runtime(self, task: wfs.Task, site: str) -> int:
        """Return runtime of task on site from runtime lookup.

        :param task: task to look up.
        :param site: site name.
        :return: runtime in seconds, at least 1.
        """

        runtime = self.runtime_lookup.get_runtime(task, site)

        # bool is a subclass of int.
        if (not isinstance(runtime, int) or isinstance(runtime, bool)
                or runtime < 1):
            raise RuntimeUnavailable(
                f"Invalid runtime {runtime!r} for job {task.id} "
                f"({task.fqdn}) on site {site}"
            )

        return runtime

    def average_compute_time(
            self,
            task: wfs.Task,
            sites: tp.Optional[list[str]] = None,
    ) -> float:
        """Return runtime of task averaged over feasible sites and
        weighted by number of processors on each site.

        :param task: task for calculation.
        :param sites: feasible sites. Looked up if not given.
        :return: average compute time in seconds.
        """

        if sites is None:
            sites = self.feasible_sites(task)

        if not sites:
            raise NoFeasibleSite(f"No runnable site for job {task.id} "
                                 f"({task.fqdn})")

        total_nodes = 0
        total = 0

        for site in sites:
            nodes = self.registry.get_free_nodes(site)
            runtime = self.get_runtime(task, site)

            total_nodes += nodes
            total += runtime * nodes

        return total / total_nodes

    def downward_rank(self, node: wfs.Node) -> float:
        """Compute downward rank of node. Ranks of all parents should
        be already set.

        :param node: node whose rank is computed.
        :return: downward rank.
        """

        result = 0.0

        for parent in node.parents:
            value = (parent.annotation.downward_rank
                     + parent.annotation.avg_compute_time
                     + self.average_communication_cost)

            if value > result:
                result = value

        return result

    def annotate(
            self,
            workflow: wfs.WorkflowGraph,
            root: tp.Optional[wfs.Node] = None,
    ) -> list[wfs.Node]:
        """Set average compute time and downward rank for every node
        except `root`, which keeps zero values.

        :param workflow: graph to annotate.
        :param root: synthetic root of graph.
        :return: annotated nodes in breadth first order.
        """

        for node in workflow:
            if node is root:
                continue

            node.annotation.avg_compute_time = self.average_compute_time(
                node.task,
            )
            logger.debug(f"Average Compute Time {node.id} is "
                         f"{node.annotation.avg_compute_time}")

        ranked: list[wfs.Node] = []

        for node in workflow.breadth_first_order():
            if node is root:
                node.annotation.downward_rank = 0.0
                continue

            node.annotation.downward_rank = self.downward_rank(node)
            ranked.append(node)

            logger.debug(f"Downward rank for node {node.id} is "
                         f"{node.annotation.downward_rank}")

        return ranked
