"""Pipeline components.

This package contains the in-memory query pipeline, its numeric (primitive)
counterpart and the collector recipes used by ``collect``.
"""
