"""Evaluate x^2 + x + 5 for two values of x on separate graphs."""

import arithgraph as ag


def build() -> tuple[ag.Builder, int, int]:
    builder = ag.Builder()
    x = builder.init()
    x_squared = builder.mul(x, x)
    five = builder.constant(5)
    x_squared_plus_5 = builder.add(x_squared, five)
    y = builder.add(x_squared_plus_5, x)
    return builder, x, y


for value in (6, 65536):
    builder, x, y = build()
    builder.fill_nodes(x, value)
    # 65536**2 wraps to 0 in 32 bits
    print(f"x = {value}: {builder.get(y).output}")
