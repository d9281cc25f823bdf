"""
Render a classification result as a fixed-width text report.

Output layout:
- A column-aligned advisory table, or a single line when there are none
- A failure block listing un-excepted production advisories
- An extraneous-exceptions block listing exceptions that can be removed

Every line goes to the same text stream, in that order, one write per line.
"""
from typing import List, Optional, Sequence, TextIO

from decisioning.advisory import Advisory
from decisioning.classifier import ClassificationResult

from .render_config import RenderConfig, TRUNCATION_MARKER, URL_PREFIX


NO_ADVISORIES_MESSAGE = 'There are no advisories against your dependencies. Hooray!'


class ReportRenderer:
    """
    Formats classified advisories for a terminal.

    The renderer holds only its configuration, so one instance can render
    any number of results.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render(self, result: ClassificationResult) -> List[str]:
        """
        Build every report line for a classification result.

        Args:
            result: Output of AdvisoryClassifier.classify()

        Returns:
            Lines in output order, without trailing newlines
        """
        lines = []

        if result.advisories:
            lines.extend(self.tabulate_advisories(result.advisories).split('\n'))
        else:
            lines.append(self.colorize(NO_ADVISORIES_MESSAGE, 'success'))

        lines.extend(self.render_summary(result))
        return lines

    def write(self, result: ClassificationResult, stream: TextIO):
        """Render a result and write it to stream, one line at a time."""
        for line in self.render(result):
            stream.write(line + '\n')

    def render_summary(self, result: ClassificationResult) -> List[str]:
        """Narrative lines describing failures and removable exceptions."""
        lines = []

        if result.failing_ids:
            lines.append(
                "Audit failed pending the following advisory(s): "
                f"{', '.join(result.failing_ids)}."
            )
            lines.append('To fix the build, please resolve the previous advisory(s), or add exceptions.')

        if result.extraneous_exceptions or result.extraneous_dev_exceptions:
            if result.extraneous_exceptions:
                lines.append(
                    'The following exception(s) do not match any advisory against the directory: '
                    f"{', '.join(result.extraneous_exceptions)}."
                )

            if result.extraneous_dev_exceptions:
                lines.append(
                    'The following exceptions apply only to development dependencies: '
                    f"{', '.join(result.extraneous_dev_exceptions)}."
                )

            lines.append('These exceptions can safely be removed.')

        return lines

    def tabulate_advisories(self, advisories: Sequence[Advisory]) -> str:
        """
        Lay advisories out as a bordered, column-aligned table.

        Returns:
            The table as one newline-joined string
        """
        table = [list(self.config.table_headings)]
        table.extend(self.advisory_cells(advisory) for advisory in advisories)

        colors = [None] + [self.row_color(advisory) for advisory in advisories]

        max_lengths = [
            max(len(row[column_index]) for row in table)
            for column_index in range(len(self.config.table_headings))
        ]

        # Every cell gets one leading space and enough trailing space to
        # reach its column's widest cell, plus one
        rows = []
        for row, color in zip(table, colors):
            cells = [
                ' ' + datum + ' ' * (1 + max_lengths[column_index] - len(datum))
                for column_index, datum in enumerate(row)
            ]
            rows.append(self.colorize('|'.join(cells), color))

        width = len(rows[0])

        rows.insert(0, '=' * width)
        rows.insert(2, '-' * width)
        rows.append('=' * width)

        return '\n'.join(rows)

    def advisory_cells(self, advisory: Advisory) -> List[str]:
        return [
            advisory.id,
            self.abbreviate_module(advisory.module),
            self.abbreviate_title(advisory.title),
            self.config.abbreviate_severity(advisory.severity),
            advisory.url.removeprefix(URL_PREFIX),
            'y' if advisory.is_production else 'n',
            'y' if advisory.is_excepted else 'n',
        ]

    def row_color(self, advisory: Advisory) -> Optional[str]:
        if advisory.is_production and not advisory.is_excepted:
            return 'danger'
        if advisory.is_production and advisory.is_excepted:
            return 'warning'
        return None

    def abbreviate_title(self, title: str) -> str:
        for phrase, replacement in self.config.title_substitutions:
            title = title.replace(phrase, replacement)
        return _truncate(title, self.config.max_title_length)

    def abbreviate_module(self, module: str) -> str:
        return _truncate(module, self.config.max_module_length)

    def colorize(self, text: str, color: Optional[str]) -> str:
        """Wrap text in an ANSI color; plain text when colors are off."""
        code = self.config.color_code(color)
        if not self.config.colors_enabled or code is None:
            return text
        return f"\033[{code}m{text}\033[0m"


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length - 1] + TRUNCATION_MARKER
    return text
