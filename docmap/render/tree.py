"""
Tree rendering for document maps.

Draws documents as box-drawing trees with token counts and key terms.
Every method returns a string; printing is left to the caller.
"""

from __future__ import annotations

from collections import Counter

from docmap.config import DocmapConfig
from docmap.core.document import Document, Section

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
CYAN = "\033[36m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"

LEVEL_STYLES = {
    1: BOLD + CYAN,
    2: BOLD + BLUE,
    3: YELLOW,
}

MIN_HEADER_WIDTH = 60
EXPAND_RULE_WIDTH = 50


def format_tokens(tokens: int) -> str:
    """Format a token count, e.g. 950 -> "950", 1234 -> "1.2k"."""
    if tokens >= 1000:
        return f"{tokens / 1000:.1f}k"
    return str(tokens)


def center_text(text: str, width: int) -> str:
    """Left-pad text so it sits in the middle of ``width`` (no right pad)."""
    if len(text) >= width:
        return text[:width]
    return " " * ((width - len(text)) // 2) + text


def truncate(text: str, max_width: int) -> str:
    """Cut text to ``max_width`` characters, ending in "..."."""
    if len(text) > max_width:
        return text[: max_width - 3] + "..."
    return text


class TreeRenderer:
    """
    Render documents and directories as text trees.

    Args:
        config: Display limits. Defaults to DocmapConfig().
        color: Emit ANSI styling. Overrides ``config.color`` when given.
    """

    def __init__(self, config: DocmapConfig | None = None, color: bool | None = None) -> None:
        self._config = config or DocmapConfig()
        if color is None:
            color = bool(self._config.color)
        self._color = color

    def _style(self, text: str, style: str) -> str:
        if not self._color or not style:
            return text
        return f"{style}{text}{RESET}"

    # ------------------------------------------------------------------
    # Single document
    # ------------------------------------------------------------------

    def document_tree(self, document: Document) -> str:
        """Render a full document map."""
        info = (
            f"Sections: {document.section_count} | "
            f"~{format_tokens(document.total_tokens)} tokens"
        )
        lines = self._header(document.filename, info)

        for i, section in enumerate(document.sections):
            is_last = i == len(document.sections) - 1
            self._render_section(section, "", is_last, False, lines)

        lines.append("")
        return "\n".join(lines)

    def filtered_tree(self, document: Document, name: str) -> str:
        """Render one section (found by name) and its subtree."""
        section = document.get_section(name)
        if section is None:
            return f"Section '{name}' not found"

        title = self._style(section.title, BOLD + CYAN)
        lines = [
            f"{self._style('╭── ', DIM)}{title} "
            f"{self._style(f'({format_tokens(section.tokens)} tokens)', DIM)}"
        ]

        for i, child in enumerate(section.children):
            is_last = i == len(section.children) - 1
            self._render_section(child, "", is_last, True, lines)

        lines.append("")
        return "\n".join(lines)

    def expand_section(self, document: Document, name: str) -> str:
        """Render the content of one section, limited to a number of lines."""
        section = document.get_section(name)
        if section is None:
            return f"Section '{name}' not found"

        lines = [
            self._style(section.title, BOLD + CYAN),
            self._style("─" * EXPAND_RULE_WIDTH, DIM),
            "",
        ]

        content_lines = section.content.split("\n")
        max_lines = self._config.expand_max_lines
        if len(content_lines) > max_lines:
            lines.extend(content_lines[:max_lines])
            lines.append("")
            lines.append(
                self._style(f"... ({len(content_lines) - max_lines} more lines)", DIM)
            )
        else:
            lines.append(section.content)

        return "\n".join(lines)

    def _render_section(
        self,
        section: Section,
        prefix: str,
        is_last: bool,
        is_filtered: bool,
        lines: list[str],
    ) -> None:
        connector = "└── " if is_last else "├── "
        tokens = self._style(f"({format_tokens(section.tokens)})", DIM)
        title = self._style(section.title, LEVEL_STYLES.get(section.level, ""))
        lines.append(f"{prefix}{self._style(connector, DIM)}{title} {tokens}")

        child_prefix = prefix + ("    " if is_last else "│   ")

        if section.key_terms and (section.level <= 2 or is_filtered):
            terms = truncate(", ".join(section.key_terms), self._config.key_terms_max_width)
            lines.append(f"{child_prefix}{self._style('└─ ' + terms, DIM)}")

        for i, child in enumerate(section.children):
            child_is_last = i == len(section.children) - 1
            self._render_section(child, child_prefix, child_is_last, is_filtered, lines)

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def multi_tree(self, documents: list[Document], dir_name: str) -> str:
        """Render an overview of several documents."""
        total_tokens = sum(doc.total_tokens for doc in documents)
        total_sections = sum(doc.section_count for doc in documents)
        info = (
            f"{len(documents)} files | {total_sections} sections | "
            f"~{format_tokens(total_tokens)} tokens"
        )
        lines = self._header(f"{dir_name.rstrip('/')}/", info)

        for i, document in enumerate(documents):
            is_last = i == len(documents) - 1
            self._render_document_summary(document, is_last, lines)

        lines.append("")
        return "\n".join(lines)

    def _render_document_summary(self, document: Document, is_last: bool, lines: list[str]) -> None:
        connector = "└── " if is_last else "├── "
        tokens = self._style(f"({format_tokens(document.total_tokens)})", DIM)
        filename = self._style(document.filename, BOLD + GREEN)
        lines.append(f"{self._style(connector, DIM)}{filename} {tokens}")

        child_prefix = "    " if is_last else "│   "
        top_sections = self.top_sections(document)
        for j, section in enumerate(top_sections):
            section_connector = "└─ " if j == len(top_sections) - 1 else "├─ "
            title = truncate(section.title, self._config.title_max_width)
            lines.append(f"{child_prefix}{self._style(section_connector, DIM)}{title}")

    def top_sections(self, document: Document) -> list[Section]:
        """Root sections shallow enough for the directory overview."""
        shallow = [
            section
            for section in document.sections
            if section.level <= self._config.summary_max_level
        ]
        return shallow[: self._config.summary_max_sections]

    def refs_tree(self, documents: list[Document], dir_name: str) -> str:
        """Render references between documents and the hub documents."""
        linking = [doc for doc in documents if doc.references]
        hubs = find_hubs(documents)
        total_refs = sum(len(doc.references) for doc in documents)
        info = f"{len(linking)} files with links | {total_refs} references | {len(hubs)} hubs"
        lines = self._header(f"{dir_name.rstrip('/')}/", info)

        if not linking:
            lines.append("No references between markdown files")
            lines.append("")
            return "\n".join(lines)

        for i, document in enumerate(linking):
            is_last = i == len(linking) - 1
            connector = "└── " if is_last else "├── "
            targets = unique_targets(document)
            filename = self._style(document.filename, BOLD + GREEN)
            count = self._style(f"({len(targets)} links)", DIM)
            lines.append(f"{self._style(connector, DIM)}{filename} {count}")

            child_prefix = "    " if is_last else "│   "
            for j, target in enumerate(targets):
                target_connector = "└─ " if j == len(targets) - 1 else "├─ "
                lines.append(f"{child_prefix}{self._style(target_connector, DIM)}→ {target}")

        if hubs:
            lines.append("")
            lines.append(self._style("Hubs (referenced by 2+ documents):", BOLD))
            for target, count in hubs:
                lines.append(f"  {self._style(target, YELLOW)} ← {count} documents")

        lines.append("")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    def _header(self, title: str, info: str) -> list[str]:
        inner_width = max(MIN_HEADER_WIDTH, len(info) + 4)
        title_line = f" {title} "
        padding = inner_width - len(title_line)
        left_pad = max(padding // 2, 0)
        right_pad = max(padding - left_pad, 0)
        return [
            f"╭{'─' * left_pad}{title_line}{'─' * right_pad}╮",
            f"│ {center_text(info, inner_width - 2):<{inner_width - 2}} │",
            f"╰{'─' * inner_width}╯",
            "",
        ]


def unique_targets(document: Document) -> list[str]:
    """Reference targets of a document, first occurrence order."""
    return list(dict.fromkeys(ref.target for ref in document.references))


def find_hubs(documents: list[Document]) -> list[tuple[str, int]]:
    """
    Targets linked from two or more distinct documents.

    Targets are compared as written. Returns (target, document count)
    pairs, most referenced first, ties in first-seen order.
    """
    counts: Counter[str] = Counter()
    for document in documents:
        counts.update(unique_targets(document))
    return [(target, count) for target, count in counts.most_common() if count >= 2]
