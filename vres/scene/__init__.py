"""Retained scene nodes and tree utilities."""

from vres.scene.node import Node, create_node

__all__ = ["Node", "create_node"]
