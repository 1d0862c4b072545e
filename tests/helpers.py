"""Test data builders."""

from freespeed.network import Link
from freespeed.shared.constants import FEATURE_COLUMNS

# length, speed, num_lanes, change_speed, change_num_lanes,
# num_to_links, num_conns, num_response, num_foes, junction_inc_lanes
RAW_FEATURES = (1000.0, 10.0, 1.0, 0.0, 0.0, 2.0, 4.0, 1.0, 2.0, 2.0)

# intercept + raw features + one derived ratio
N_PARAMS = len(FEATURE_COLUMNS) + 2


def constant_params(factor: float) -> list:
    """Parameters whose prediction is ``factor`` for any features."""
    return [factor] + [0.0] * (N_PARAMS - 1)


def make_link(link_id, from_node, to_node, allowed, highway, length=1000.0):
    return Link(
        id=link_id,
        from_node=from_node,
        to_node=to_node,
        length=length,
        allowed_speed=allowed,
        free_speed=allowed,
        highway_type=highway,
    )


def structural_request_json(factor: float) -> dict:
    """Request payload with the same constant factor for every junction type."""
    return {
        "priority": constant_params(factor),
        "right_before_left": constant_params(factor),
        "traffic_light": constant_params(factor),
    }


NETWORK_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE network SYSTEM "http://www.matsim.org/files/dtd/network_v2.dtd">
<network>
  <nodes>
    <node id="A" x="0.0" y="0.0"/>
    <node id="B" x="1000.0" y="0.0"/>
    <node id="C" x="2000.0" y="0.0"/>
    <node id="F" x="3000.0" y="0.0"/>
    <node id="D" x="0.0" y="1000.0"/>
    <node id="E" x="1000.0" y="1000.0"/>
  </nodes>
  <links capperiod="01:00:00" effectivecellsize="7.5" effectivelanewidth="3.75">
    <link id="tl" from="A" to="B" length="1000.0" freespeed="10.0" capacity="600.0" permlanes="1.0" oneway="1" modes="car">
      <attributes>
        <attribute name="type" class="java.lang.String">highway.primary</attribute>
        <attribute name="allowed_speed" class="java.lang.Double">10.0</attribute>
      </attributes>
    </link>
    <link id="prio" from="B" to="C" length="1000.0" freespeed="10.0" capacity="600.0" permlanes="1.0" oneway="1" modes="car">
      <attributes>
        <attribute name="type" class="java.lang.String">highway.residential</attribute>
        <attribute name="allowed_speed" class="java.lang.Double">10.0</attribute>
      </attributes>
    </link>
    <link id="rbl" from="C" to="F" length="1000.0" freespeed="10.0" capacity="600.0" permlanes="1.0" oneway="1" modes="car">
      <attributes>
        <attribute name="type" class="java.lang.String">highway.residential</attribute>
      </attributes>
    </link>
    <link id="mw1" from="A" to="D" length="1000.0" freespeed="30.0" capacity="2000.0" permlanes="2.0" oneway="1" modes="car">
      <attributes>
        <attribute name="type" class="java.lang.String">highway.motorway</attribute>
        <attribute name="allowed_speed" class="java.lang.Double">30.0</attribute>
      </attributes>
    </link>
    <link id="mw2" from="D" to="E" length="1000.0" freespeed="30.0" capacity="2000.0" permlanes="2.0" oneway="1" modes="car">
      <attributes>
        <attribute name="type" class="java.lang.String">highway.motorway_link</attribute>
        <attribute name="allowed_speed" class="java.lang.Double">30.0</attribute>
      </attributes>
    </link>
  </links>
</network>
"""

FEATURE_HEADER = ["linkId", "highway_type", "junction_type"] + list(FEATURE_COLUMNS)


def write_network_xml(path):
    path.write_text(NETWORK_XML, encoding="utf-8")
    return path


def write_features_csv(path, junction_types=None):
    junction_types = junction_types or {
        "tl": "traffic_light",
        "prio": "priority",
        "rbl": "right_before_left",
    }
    lines = [",".join(FEATURE_HEADER)]
    for link_id, jt in junction_types.items():
        values = ",".join(str(v) for v in RAW_FEATURES)
        lines.append(f"{link_id},residential,{jt},{values}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_validation_csv(path, rows):
    """rows: (from_node, to_node, hour, dist, travel_time)"""
    lines = ["from_node,to_node,hour,dist,travel_time"]
    lines += [",".join(str(v) for v in row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# Samples reproducing the network speeds at free-flow hours
VALIDATION_ROWS = [
    ("A", "C", 3, 2000, 200),
    ("A", "C", 21, 2000, 200),
    ("A", "C", 8, 2000, 400),
    ("C", "F", 3, 1000, 100),
    ("A", "E", 21, 3000, 100),
]
