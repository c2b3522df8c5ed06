"""Square root hint.

The graph cannot compute a square root, but it can check one: the caller
supplies the root of x + 7 as a hint, the graph squares it, and the square
is compared with x + 7.
"""

import arithgraph as ag

builder = ag.Builder()

x = builder.init()
seven = builder.constant(7)
x_plus_seven = builder.add(x, seven)
# Witness computed outside the graph
sqrt_x_plus_7 = builder.hint(4, x_plus_seven)
computed_sq = builder.mul(sqrt_x_plus_7, sqrt_x_plus_7)

# Only constants and hints have outputs so far
for node in builder.nodes:
    print(node)

builder.fill_nodes(x, 9)

# Every node now has an output
for node in builder.nodes:
    print(node)

print(f"Node {x_plus_seven}: {builder.get(x_plus_seven)}")
print(f"Constraints hold: {builder.check_constraints().success}")
print(f"Hint equality holds: {builder.assert_hint(sqrt_x_plus_7, computed_sq)}")
