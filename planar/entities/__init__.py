"""
Board entities: resource/tool/influence kinds, nodes, the type registry, and planes.
"""
from .node import Node, NodeType
from .resources import InfluenceKind, ResourceKind, ToolKind
