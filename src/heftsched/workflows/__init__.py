from .task import Task
from .node import Annotation, Node
from .graph import WorkflowGraph
from .parser import PegasusTraceParser
