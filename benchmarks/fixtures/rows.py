"""Row data for loop benchmarks: (name, quantity) pairs."""

SMALL_ROWS = [(f"item-{i}", i * 3) for i in range(10)]

LARGE_ROWS = [(f"item-{i}", i * 3) for i in range(1000)]
