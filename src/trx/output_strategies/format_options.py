"""Rendering configuration shared by all output strategies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormatOptions:
    """Options controlling how a tree is rendered.

    Attributes:
        colorize (bool): Color names by kind and read-only status (text output)
            or include the color stylesheet (HTML output).
        decorate (bool): Append a type suffix: ``/`` for directories, ``*`` for
            executables, ``@`` for symlinks.
        full_paths (bool): Show each entry's full path instead of its basename.
        indent (bool): Draw box-drawing connectors (text) or indent (JSON).
        quote_names (bool): Wrap names in double quotes.
        emit_links (bool): Render names as hyperlinks to their paths (HTML output).
    """

    colorize: bool = False
    decorate: bool = False
    full_paths: bool = False
    indent: bool = True
    quote_names: bool = False
    emit_links: bool = False
