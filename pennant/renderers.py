"""
Pennant help and version renderers.

A renderer is any object exposing a callable render(command). Commands hold one
help renderer and one version renderer, chosen at construction (helper=...,
versioner=...) and swappable later; the dispatcher only ever calls render().

Provided renderers
- DefaultHelpRenderer: plain text help.

      gives a friendly hello

      Usage:
        hello TEXT

      Flags:
        -h, --help	help for hello
        -v, --version	version for hello

- DefaultVersionRenderer: "{name} version {version}".
- StyledHelpRenderer / StyledVersionRenderer: rich renderables honoring the
  command's colorful/fancy settings and the __styles__ palette overrides in __main__.

Custom renderers
    class ShortHelp:
        def render(self, command):
            return f"{command.name}: {command.usage}"

    Command(..., helper=ShortHelp())
"""
from collections import defaultdict

from rich.panel import Panel
from rich.text import Text

from .flags import SHORT_PREFIX, LONG_PREFIX
from .values import Boolean


def supports_render(object, /):
    """Return whether object can act as a help or version renderer."""
    return hasattr(object, "render") and callable(object.render)


class DefaultHelpRenderer:
    """Plain text help: description, usage and one line per declared flag."""

    def render(self, command):
        text = f"{command.descr}\n"
        text += "\n"
        text += "Usage:\n"
        text += f"  {command.usage}\n"
        text += "\n"
        text += "Flags:\n"
        for flag in command.flags:
            text += f"{flag}\n"
        return text

    def __repr__(self):
        return "default-help-renderer()"


class DefaultVersionRenderer:
    """Plain text version line."""

    def render(self, command):
        return f"{command.name} version {command.version}"

    def __repr__(self):
        return "default-version-renderer()"


def _palette(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class StyledHelpRenderer:
    """
    Rich help renderer.

    Palette keys
    - description-section, usage-label, program-name, usage-section
    - group-label, flag-name, metavar, argument-description
    - panel-title

    When the command is not colorful every style is dropped; when it is fancy the
    sections are wrapped in a rounded panel titled with the program name.
    """

    def render(self, command):
        styles = _palette({
            "description-section": "italic #A3A3A3",  # Neutral gray
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "group-label": "bold #FFFFFF",  # Pure white headers
            "flag-name": "bold #22C55E",  # GREEN for flags
            "metavar": "bold #FFD600",  # AMBER for typed flag values
            "argument-description": "#9CA3AF",  # Muted gray
            "panel-title": "bold #FF4D94",  # Magenta branding
        })

        def styler(style):
            return styles[style] if command.colorful else ""

        renders = Text()
        if command.descr:
            renders.append(command.descr, styler("description-section")).append("\n\n")

        renders.append("Usage:", styler("usage-label")).append("\n  ")
        program, _, rest = command.usage.partition(" ")
        renders.append(program, styler("program-name"))
        if rest:
            renders.append(" ").append(rest, styler("usage-section"))
        renders.append("\n\n")

        renders.append("Flags:", styler("group-label")).append("\n")

        # align descriptions on the widest "-s, --long METAVAR" cell
        cells = []
        for flag in command.flags:
            cell = Text("  ")
            cell.append(SHORT_PREFIX + flag.short, styler("flag-name")).append(", ")
            cell.append(LONG_PREFIX + flag.long, styler("flag-name"))
            if not isinstance(flag.value, Boolean):
                cell.append(" ").append(flag.value.kind.upper(), styler("metavar"))
            cells.append((cell, flag))
        width = max((len(cell) for cell, _ in cells), default=0) + 2

        for cell, flag in cells:
            cell.pad_right(width - len(cell))
            renders.append(cell).append(flag.descr, styler("argument-description")).append("\n")

        renders.rstrip()

        if command.fancy:
            return Panel(
                renders,
                title=Text.assemble("[", " ", f"{command.name} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )
        return renders

    def __repr__(self):
        return "styled-help-renderer()"


class StyledVersionRenderer:
    """
    Rich version renderer: "<name> — <version>".

    Palette keys: program-name, program-version, panel-title.
    """

    def render(self, command):
        styles = _palette({
            "program-name": "bold #FF4D94",  # Magenta-pink brand pop
            "program-version": "bold #00E6FF",  # Cyan version (clear contrast)
            "panel-title": "bold #FF4D94",  # Magenta title
        })

        def styler(style):
            return styles[style] if command.colorful else ""

        renders = Text(" — ").join((
            Text(command.name, styler("program-name")),
            Text(command.version, styler("program-version")),
        ))

        if command.fancy:
            return Panel(
                renders,
                title=Text.assemble("[", " ", f"{command.name} VERSION".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )
        return renders

    def __repr__(self):
        return "styled-version-renderer()"


__all__ = (
    "supports_render",
    "DefaultHelpRenderer",
    "DefaultVersionRenderer",
    "StyledHelpRenderer",
    "StyledVersionRenderer",
)
