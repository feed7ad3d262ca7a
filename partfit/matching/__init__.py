# Matching package for the PartFit Compatibility Engine
"""
Deterministic compatibility matching.

Provides the hard rules, confidence scorer, verdict model and the
glass and display-swap matchers, where every verdict is decomposable
into labelled reasons.
"""
