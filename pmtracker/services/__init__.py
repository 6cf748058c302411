"""
Service layer: orchestration between repositories and the scheduling core.
"""
