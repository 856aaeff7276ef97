"""SolutionsHub - relevance-ranked grid placement for the solutions marketplace."""

__version__ = "0.1.0"
