"""gridbase - a tabular data engine.

Tables of typed columns and schemaless rows, with filtered and sorted
views and a kanban board grouped by a select column.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
