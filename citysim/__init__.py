"""
City Growth Simulation

A deterministic, headless zoned-city growth simulator. Cells grow under
shared worker and goods budgets while industry pollutes its neighbourhood.

Architecture: the Grid is the source of truth. Display and CLI are consumers.
"""

__version__ = "0.1.0"
