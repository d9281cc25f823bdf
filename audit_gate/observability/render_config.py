"""
Rendering configuration for the advisory report.

All lookup tables live here as immutable data and are injected into the
renderer through RenderConfig, so tests and callers can swap any of them
without touching module state.

Design decisions:
- Substitutions are ordered pairs, applied in sequence
- Unknown severities and titles pass through unchanged
- Color codes are plain ANSI SGR numbers
"""
from dataclasses import dataclass
from typing import Optional, Tuple


# Common, easily-abbreviated phrases in advisory titles
TITLE_SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (
    ('Regular Expression', 'Regex'),
    ('Denial of Service', 'DoS'),
    ('Remote Code Execution', 'RCE'),
)

SEVERITY_ABBREVIATIONS: Tuple[Tuple[str, str], ...] = (
    ('critical', 'crit'),
    ('moderate', 'mod'),
)

TABLE_HEADINGS: Tuple[str, ...] = ('ID', 'Module', 'Title', 'Sev.', 'URL', 'Prod', 'Ex.')

COLORS: Tuple[Tuple[str, int], ...] = (
    ('danger', 31),
    ('warning', 33),
    ('success', 32),
)

REQUIRED_COLORS = ('danger', 'warning', 'success')

TRUNCATION_MARKER = '~'
URL_PREFIX = 'https://'

DEFAULT_MAX_MODULE_LENGTH = 16
DEFAULT_MAX_TITLE_LENGTH = 16


@dataclass(frozen=True)
class RenderConfig:
    """Options and lookup tables for ReportRenderer."""
    max_module_length: int = DEFAULT_MAX_MODULE_LENGTH
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH
    colors_enabled: bool = True
    title_substitutions: Tuple[Tuple[str, str], ...] = TITLE_SUBSTITUTIONS
    severity_abbreviations: Tuple[Tuple[str, str], ...] = SEVERITY_ABBREVIATIONS
    table_headings: Tuple[str, ...] = TABLE_HEADINGS
    colors: Tuple[Tuple[str, int], ...] = COLORS

    def __post_init__(self):
        for name in ('max_module_length', 'max_title_length'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if len(self.table_headings) != len(TABLE_HEADINGS):
            raise ValueError(
                f"table_headings must have {len(TABLE_HEADINGS)} entries, "
                f"got {len(self.table_headings)}"
            )

        missing_colors = sorted(set(REQUIRED_COLORS) - set(dict(self.colors)))
        if missing_colors:
            raise ValueError(f"colors must define {', '.join(missing_colors)}")

    def color_code(self, name: Optional[str]) -> Optional[int]:
        """ANSI code for a color name, or None for no color."""
        if name is None:
            return None
        return dict(self.colors)[name]

    def abbreviate_severity(self, severity: str) -> str:
        return dict(self.severity_abbreviations).get(severity, severity)
