"""Core business logic layer.

Subpackages:
- shopping: grocery list aggregation
- reporting: nutrition totals
- planner: drag-and-drop board and calendar grid
"""
__all__ = ["shopping", "reporting", "planner"]
