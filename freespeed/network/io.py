"""
Network reader and writer.

Reads MATSim network XML (plain or gzipped) into a NetworkGraph and
writes the mutated graph back into the same document.
"""

import gzip
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from freespeed.errors import NetworkFormatError
from .models import Link, NetworkGraph, Node

logger = logging.getLogger(__name__)

HIGHWAY_PREFIX = "highway."
DOCTYPE = '<!DOCTYPE network SYSTEM "http://www.matsim.org/files/dtd/network_v2.dtd">'


def _open(path: Path, mode: str):
    if path.suffix == ".gz":
        return gzip.open(path, mode)
    return open(path, mode)


def _get_attribute(element: ET.Element, name: str) -> Optional[ET.Element]:
    attributes = element.find("attributes")
    if attributes is None:
        return None
    for attr in attributes.findall("attribute"):
        if attr.get("name") == name:
            return attr
    return None


def _set_attribute(element: ET.Element, name: str, value: float) -> None:
    attributes = element.find("attributes")
    if attributes is None:
        attributes = ET.SubElement(element, "attributes")

    attr = _get_attribute(element, name)
    if attr is None:
        attr = ET.SubElement(attributes, "attribute", name=name)
    attr.set("class", "java.lang.Double")
    attr.text = repr(float(value))


def _highway_type(element: ET.Element) -> str:
    attr = _get_attribute(element, "type")
    if attr is None or not attr.text:
        return ""
    value = attr.text.strip()
    if value.startswith(HIGHWAY_PREFIX):
        return value[len(HIGHWAY_PREFIX):]
    return value


def read_network(path: str | Path) -> NetworkGraph:
    """
    Read a network file.

    Args:
        path: Network XML, optionally ``.gz`` compressed

    Returns:
        NetworkGraph holding the parsed document

    Raises:
        NetworkFormatError: If the file is not a valid network
    """
    path = Path(path)
    try:
        with _open(path, "rb") as f:
            tree = ET.parse(f)
    except ET.ParseError as e:
        raise NetworkFormatError(f"Invalid network file {path}: {e}") from e

    root = tree.getroot()
    graph = NetworkGraph(source=tree)

    try:
        for el in root.iter("node"):
            graph.add_node(Node(
                id=el.get("id"),
                x=float(el.get("x")),
                y=float(el.get("y")),
            ))

        for el in root.iter("link"):
            freespeed = float(el.get("freespeed"))
            allowed = _get_attribute(el, "allowed_speed")
            allowed_speed = float(allowed.text) if allowed is not None else freespeed

            graph.add_link(Link(
                id=el.get("id"),
                from_node=el.get("from"),
                to_node=el.get("to"),
                length=float(el.get("length")),
                allowed_speed=allowed_speed,
                free_speed=freespeed,
                highway_type=_highway_type(el),
            ))
    except (TypeError, ValueError) as e:
        raise NetworkFormatError(f"Invalid network element in {path}: {e}") from e

    logger.info(f"Read network {path}: {len(graph.nodes)} nodes, {len(graph.links)} links")
    return graph


def write_network(graph: NetworkGraph, path: str | Path) -> None:
    """
    Write the graph in the format it was loaded from.

    Link free speeds and applied speed factors are written into the
    loaded document; everything else is kept as read.
    """
    path = Path(path)
    if graph.source is None:
        raise NetworkFormatError("Network was not loaded from a file and cannot be written")

    tree: ET.ElementTree = graph.source
    for el in tree.getroot().iter("link"):
        link = graph.links.get(el.get("id"))
        if link is None:
            continue
        el.set("freespeed", repr(float(link.free_speed)))
        if link.applied_factor is not None:
            _set_attribute(el, "speed_factor", link.applied_factor)

    path.parent.mkdir(parents=True, exist_ok=True)
    with _open(path, "wb") as f:
        f.write(b'<?xml version="1.0" encoding="UTF-8"?>\n')
        f.write(DOCTYPE.encode("utf-8") + b"\n")
        tree.write(f, encoding="utf-8", xml_declaration=False)

    logger.info(f"Wrote network {path}")
