"""Performance benchmarks for qvsim.

This package contains microbenchmarks for hot paths in the engine:
in-place gate kernels, noisy circuit runs and shot sampling.
"""
