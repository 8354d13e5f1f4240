"""
Section tree builder.

Builds section trees from the flat, source-ordered heading list produced
by the markdown parser, and rolls token counts up the tree.
"""

from __future__ import annotations

from docmap.core.document import Section


class SectionTreeBuilder:
    """
    Builds section forests from flat heading lists.

    Building and token rollup are separate steps. ``build`` only links
    sections; ``rollup`` overwrites ``tokens`` with cumulative counts.
    Anything that needs the own-content figure reads ``own_tokens``, which
    rollup never touches.
    """

    @staticmethod
    def build(sections: list[Section]) -> list[Section]:
        """Link a flat list of sections into a forest.

        Strategy:
        1. Keep a stack of open ancestors
        2. Pop while the top's level is >= the incoming section's level
        3. Empty stack: the section is a new root
        4. Otherwise: attach it to the top of the stack
        5. Push the section

        A heading therefore nests under the nearest preceding heading of a
        strictly lower level, even when levels are skipped (an h3 straight
        after an h1 becomes the h1's child).

        Args:
            sections: Sections in source order with no children attached.

        Returns:
            Root sections in source order.
        """
        roots: list[Section] = []
        stack: list[Section] = []

        for section in sections:
            while stack and stack[-1].level >= section.level:
                stack.pop()

            if stack:
                stack[-1].add_child(section)
            else:
                roots.append(section)

            stack.append(section)

        return roots

    @staticmethod
    def rollup(roots: list[Section]) -> int:
        """Write cumulative token counts into every section.

        ``tokens`` becomes ``own_tokens`` plus the children's cumulative
        counts.

        Args:
            roots: Root sections of the forest.

        Returns:
            Sum of the roots' cumulative counts.
        """
        return sum(SectionTreeBuilder._rollup_section(root) for root in roots)

    @staticmethod
    def _rollup_section(section: Section) -> int:
        total = section.own_tokens
        for child in section.children:
            total += SectionTreeBuilder._rollup_section(child)
        section.tokens = total
        return total

    @staticmethod
    def build_tree(sections: list[Section]) -> list[Section]:
        """Build the forest and roll token counts up in one call."""
        roots = SectionTreeBuilder.build(sections)
        SectionTreeBuilder.rollup(roots)
        return roots
