"""
Application layer: use-case orchestration over core and boundary.
"""
