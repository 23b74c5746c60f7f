from collections import deque
from contextlib import contextmanager
import typing as tp

from loguru import logger
import networkx as nx

from heftsched.errors import GraphError
import heftsched.workflows as wfs


class WorkflowGraph:
    """Representation of a workflow as a directed acyclic graph of
    nodes. Holds nodes in insertion order and keeps parent and child
    lists of every node symmetric.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name

        # Map from node ID to node. Insertion ordered.
        self.nodes: dict[str, wfs.Node] = dict()

        # Mirror of adjacency used for structural queries.
        self.dag: nx.DiGraph = nx.DiGraph()

    def __str__(self) -> str:
        return (f"<WorkflowGraph "
                f"name = {self.name}, "
                f"nodes = {len(self.nodes)}, "
                f"edges = {self.dag.number_of_edges()}>")

    def __repr__(self) -> str:
        return f"WorkflowGraph(name = {self.name})"

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> tp.Iterator[wfs.Node]:
        return iter(list(self.nodes.values()))

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: str) -> wfs.Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise GraphError(f"Node {node_id} is not in graph {self.name}")

    def add_node(self, node: wfs.Node) -> wfs.Node:
        if node.id in self.nodes:
            raise GraphError(f"Node {node.id} is already in graph {self.name}")

        self.nodes[node.id] = node
        self.dag.add_node(node.id)

        return node

    def add_task(self, task: wfs.Task) -> wfs.Node:
        return self.add_node(wfs.Node(task=task))

    def add_edge(self, parent_id: str, child_id: str) -> None:
        """Add edge from parent to child. Input is assumed to be
        acyclic, no cycle detection is done. Duplicate edges are
        ignored.

        :param parent_id: ID of parent node.
        :param child_id: ID of child node.
        :return: None.
        """

        parent = self.get_node(parent_id)
        child = self.get_node(child_id)

        if self.dag.has_edge(parent_id, child_id):
            return

        parent.children.append(child)
        child.parents.append(parent)
        self.dag.add_edge(parent_id, child_id)

    def remove_node(self, node_id: str) -> wfs.Node:
        """Detach node from all adjacency lists and remove it.

        :param node_id: ID of node to remove.
        :return: removed node.
        """

        node = self.get_node(node_id)

        for parent in node.parents:
            parent.children.remove(node)
        for child in node.children:
            child.parents.remove(node)

        node.parents = []
        node.children = []

        del self.nodes[node_id]
        self.dag.remove_node(node_id)

        return node

    def roots(self) -> list[wfs.Node]:
        return [node for node in self.nodes.values() if not node.parents]

    def leaves(self) -> list[wfs.Node]:
        return [node for node in self.nodes.values() if not node.children]

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.dag)

    def insert_synthetic_root(self, root: wfs.Node) -> wfs.Node:
        """Add given node as a predecessor of every current root.

        :param root: node without parents and children.
        :return: inserted node.
        """

        original_roots = self.roots()

        self.add_node(root)
        for node in original_roots:
            self.add_edge(root.id, node.id)

        return root

    @contextmanager
    def synthetic_root(self, root: wfs.Node) -> tp.Iterator[wfs.Node]:
        """Insert synthetic root for the duration of the block. The
        root is removed on exit, also when the block fails.

        :param root: node to use as synthetic root.
        :return: inserted root.
        """

        self.insert_synthetic_root(root)
        logger.debug(f"Inserted synthetic root {root.id} in {self.name}")

        try:
            yield root
        finally:
            self.remove_node(root.id)
            logger.debug(f"Removed synthetic root {root.id} from {self.name}")

    def breadth_first_order(self) -> tp.Iterator[wfs.Node]:
        """Yield nodes layer by layer, so that a node is visited only
        after all its parents. Roots are taken in insertion order,
        released children in order of edge insertion.

        :return: generator over nodes.
        """

        pending: dict[str, int] = {
            node_id: len(node.parents)
            for node_id, node in self.nodes.items()
        }
        queue = deque(node for node in self.nodes.values() if not node.parents)

        while queue:
            node = queue.popleft()
            yield node

            for child in node.children:
                pending[child.id] -= 1
                if pending[child.id] == 0:
                    queue.append(child)
