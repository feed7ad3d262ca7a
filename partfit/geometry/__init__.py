# Geometry package for the PartFit Compatibility Engine
"""
Physical geometry of screens and glass parts.

Provides the value types, scalar math, cutout zone model and
tolerance checker that every matcher builds on.
"""
