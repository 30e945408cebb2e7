# spinstep

Build layered spherical graphs of oriented nodes and move through them by
applying quaternion "spin" instructions.

Each layer is a sphere of a given radius. Nodes on a layer are placed on a
Fibonacci lattice whose density is chosen by a resolution tier (tier 0 has 12
nodes, tier 1 has 48, then 192, 768 and 3072). A node's orientation is the
unit quaternion that turns the local Z axis onto its direction from the centre.
Nodes are linked to their nearest neighbours on the same layer and, between
layers, either by matching index or by closest orientation within an angle
threshold.

## Installation

```
pip install .
```

The package needs nothing beyond the standard library.

## Usage

```python
import math

from spinstep.graph import LayerDefinition, RadialConnectionMode, SpinStepGraph
from spinstep.node import NodeId
from spinstep.quaternion import Quaternion

graph = SpinStepGraph(
    [LayerDefinition(radius=1.0, resolution_tier=0),
     LayerDefinition(radius=1.5, resolution_tier=1)],
    num_tangential_neighbors=4,
    radial_connection_mode=RadialConnectionMode.CLOSEST_ORIENTATION,
    radial_angle_threshold=math.pi / 3,
)

start = NodeId(0, 0)
node = graph.get_node(start)
print(node)

spin = Quaternion.from_axis_angle(math.pi / 2, (0.0, 0.0, 1.0))
result = graph.initiate_spin_step(start, node.orientation, spin)
print(result.best_next_node_id, result.new_absolute_orientation)
```

`SpinStepGraph` defaults to 6 tangential neighbours, closest-orientation
radial links and a threshold of π/4. Nodes can be looked up with a `NodeId`
or a `(layer, index)` pair; `get_node` returns `None` for an unknown id.
`graph.layers` gives the nodes grouped by layer and `graph.nodes_by_id` a
read-only mapping of every node.

Neighbour details come back as `NeighborDetail` (a node id and the relative
spin), or `None` when there is no such neighbour:

- `graph.tangential_neighbor_details(node_id, index)`
- `graph.radial_neighbor_details(node_id, "outward")` (or `"inward"`; any
  other direction raises `ValueError`)

`initiate_spin_step` returns a `SpinStepResult` with `best_next_node_id`,
`new_absolute_orientation` and `applied_spin_instruction`.

Other modules:

- `spinstep.quaternion` — the `Quaternion` class (multiplication, inverse,
  rotation of 3-vectors, angular distance, construction from an axis and
  angle or from two vectors).
- `spinstep.node` — `Node`, `NodeId` and `calculate_position`.
- `spinstep.orientations` — `get_number_of_nodes_at_tier`,
  `generate_fibonacci_sphere_point` and `get_discrete_node_orientation`.
  Undefined tiers raise `ValueError`; out-of-range indices raise `IndexError`.

## Demonstration

A short demonstration builds a two-layer graph, prints the first node with
its neighbours, and performs one spin step:

```
spinstep-demo
```

## Limitations

Tangential neighbours are found by comparing every pair of nodes on a layer,
so building graphs with many high-tier layers is slow. There is no spatial
index, and graphs are built in memory only: nothing is saved or loaded.

## Running the tests

```
pip install ".[test]"
pytest
```