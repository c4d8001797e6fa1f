"""Graph primitives and helpers.

This package provides the validated input graph type `FlowNetwork` and
conversion helpers to and from NetworkX (`convert`).
"""
