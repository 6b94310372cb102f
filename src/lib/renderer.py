"""
Renderer for highlighted lines to HTML

Turns the engine's segment stream into either a standalone HTML document or
an embeddable fragment.
"""

import base64
import html
from datetime import datetime
from typing import List, Optional

from ..models.rules import HighlightedLine, Segment
from .palette import ColorAssignment
from .log import LOG


class Renderer:
    """
    Renders highlighted lines as HTML

    Responsibilities:
    - Wrap claimed segments in <abbr> tags carrying the field name and color
    - Escape all text taken from the input and syntax files
    - Add the footer linking the embedded syntax file
    - Optionally wrap everything in a full document
    """

    def __init__(
        self,
        colors: ColorAssignment,
        input_name: str = "",
        syntax_source: str = "",
        text_color: str = "020202",
        snippet: bool = False,
        footer: bool = True,
        project_url: str = "https://github.com/lilopkins/fixedfile-highlighter",
        generated_at: Optional[datetime] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            colors: Color assignment used by the engine
            input_name: Input file name shown in the document title
            syntax_source: Raw syntax file text, embedded in the footer link
            text_color: Foreground hex color of highlighted fields
            snippet: Emit a fragment instead of a full document
            footer: Append the "Analysed at ..." footer
            project_url: Link target for the project name in the footer
            generated_at: Timestamp shown in the footer (default: now)
        """
        self.colors = colors
        self.input_name = input_name
        self.syntax_source = syntax_source
        self.text_color = text_color
        self.snippet = snippet
        self.footer = footer
        self.project_url = project_url
        self.generated_at = generated_at

    def render(self, lines: List[HighlightedLine]) -> str:
        """
        Render all lines

        Returns:
            Complete HTML document, or the fragment when ``snippet`` is set
        """
        parts = [self.pre_build(lines)]
        if self.footer:
            parts.append(self.footer_generate())
        body = '\n'.join(parts)

        LOG(f"Rendered {len(lines)} line(s) as {'snippet' if self.snippet else 'document'}", level=2)

        if self.snippet:
            return body + '\n'
        return self.htmlDocument_build(body)

    def pre_build(self, lines: List[HighlightedLine]) -> str:
        """Wrap the rendered lines in a single <pre> block"""
        rendered = ''.join(self.line_render(line) + '\n' for line in lines)
        return f"<pre>\n{rendered}</pre>"

    def line_render(self, line: HighlightedLine) -> str:
        """Concatenate the markup of every segment of one line"""
        return ''.join(self.segment_render(segment, line.text) for segment in line.segments)

    def segment_render(self, segment: Segment, text: str) -> str:
        """
        Render one segment

        Gaps are plain escaped text. Claimed segments become:
            <abbr title="NAME" style="background: #COLOR; color: #TEXT;">TEXT</abbr>
        """
        content = html.escape(segment.text_slice(text), quote=False)
        if segment.is_gap:
            return content

        color = self.colors.color_for(segment.color_index)
        style = f"background: #{color}; color: #{self.text_color};"
        return f'<abbr title="{html.escape(segment.rule_name)}" style="{style}">{content}</abbr>'

    def footer_generate(self) -> str:
        """
        Generate the footer line

        The syntax file is embedded as a base64 data URI so the output stays
        self-contained.
        """
        timestamp = (self.generated_at or datetime.now().astimezone()).isoformat(sep=' ', timespec='seconds')
        encoded = base64.b64encode(self.syntax_source.encode('utf-8')).decode('ascii')
        return (
            f"Analysed at {timestamp} by "
            f'<a href="{html.escape(self.project_url)}" target="_blank" rel="noopener">fixedfile-highlighter</a> '
            f'using <a href="data:text/csv;base64,{encoded}">this syntax file</a>.'
        )

    def htmlDocument_build(self, body: str) -> str:
        """
        Build complete HTML document around the rendered body

        Args:
            body: <pre> block plus optional footer

        Returns:
            Complete HTML document
        """
        title = html.escape(f"Analysis of {self.input_name}")
        return f"""<!doctype html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body>
</html>
"""
