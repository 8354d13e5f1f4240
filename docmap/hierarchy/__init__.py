"""
Hierarchy module.

Turns flat heading streams into section trees with cumulative token counts.
"""

from docmap.hierarchy.builder import SectionTreeBuilder

__all__ = [
    "SectionTreeBuilder",
]
