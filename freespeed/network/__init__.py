"""
Road network inputs.

Usage:
    from freespeed.network import read_network, FeatureTable, ValidationSet

Components:
- NetworkGraph / Link / Node: typed network model
- read_network / write_network: network file I/O
- FeatureTable: per-link features and junction types
- ValidationSet: measured free-flow speeds per node pair
"""

from .models import Node, Link, NetworkGraph
from .io import read_network, write_network
from .features import FeatureEntry, FeatureTable
from .validation import FromToNodes, ValidationSample, ValidationSet

__all__ = [
    # Models
    "Node",
    "Link",
    "NetworkGraph",
    # IO
    "read_network",
    "write_network",
    # Features
    "FeatureEntry",
    "FeatureTable",
    # Validation
    "FromToNodes",
    "ValidationSample",
    "ValidationSet",
]
