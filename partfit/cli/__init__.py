# CLI package for the PartFit Compatibility Engine
"""
Read-only command line interface for running compatibility checks.

Commands:
    partfit glass   - Screen/glass verdict
    partfit display - Display swap verdict
"""
