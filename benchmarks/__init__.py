"""
Benchmark suite for kvon.

Times kvon parsing and serialization against JSON libraries working on
the same value trees:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Also measures peak memory while parsing. Run with
``pytest benchmarks --benchmark-only``.
"""
