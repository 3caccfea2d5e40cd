"""HTML report pages rendered from bundled Jinja templates."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    Undefined,
)

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType
from simple_map_fuzzer.artifact_generation.artifact_writer import read_map_text
from simple_map_fuzzer.artifact_generation.generator_settings import ACTION_NAMES, MAP_CELL_NAMES
from simple_map_fuzzer.iteration_results.result_models import (
    UNKNOWN_ERROR_CODE,
    IterationResult,
    ResultField,
)
from simple_map_fuzzer.iteration_results.statistics import (
    ExecutionTimeSummary,
    build_overview_rows,
    execution_time_summary,
    group_by_exit_code,
    percentage,
    sort_by_iteration,
    unique_values,
)
from simple_map_fuzzer.result_formatting import (
    CodeOptions,
    CustomAttributeOptions,
    ExecutionTimeOptions,
    FormatStyle,
    IterationNumberOptions,
    IterationNumbersOptions,
    MapFileNameOptions,
    MapFilePathOptions,
    MapFileTextOptions,
    MapFileTypeOptions,
    OutputMessagesOptions,
    ResultFormatter,
    ResultsFormatter,
    StringSequenceOptions,
    TimestampOptions,
    TotalIterationsOptions,
)

from .report_models import ReportPage, RunMetadata, report_page_path

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z][A-Za-z0-9_]*)\}\}")
REPORT_TITLE = "Map Fuzzer Report"
TEMPLATE_PACKAGE = "simple_map_fuzzer.report_building"

_VALUE_ONLY = {"label": False, "separator": False}


class _KeptMarker(Undefined):
    """Undefined value that renders back as its own ``{{Name}}`` marker."""

    __slots__ = ()

    def __str__(self) -> str:
        return f"{{{{{self._undefined_name}}}}}"


_MARKER_ENVIRONMENT = Environment(
    autoescape=False, undefined=_KeptMarker, keep_trailing_newline=True
)


def render_template(template_text: str, substitutions: Mapping[str, object]) -> str:
    """Insert ``substitutions`` verbatim at their ``{{Name}}`` markers.

    Markers without a substitution are left untouched. Substituted text is
    never scanned again, so it may itself contain ``{{...}}``.
    """
    return _MARKER_ENVIRONMENT.from_string(template_text).render(substitutions)


def page_environment(template_dir: Path | str | None = None) -> Environment:
    """Build the autoescaping environment for the report pages.

    Templates in ``template_dir`` take precedence over the bundled ones, so a
    directory may override single pages and still extend ``_layout.html``.
    """
    loaders: list[BaseLoader] = [PackageLoader(TEMPLATE_PACKAGE, "templates")]
    if template_dir is not None:
        loaders.insert(0, FileSystemLoader(str(template_dir)))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        undefined=_KeptMarker,
        trim_blocks=True,
        lstrip_blocks=True,
    )


@dataclass(frozen=True)
class ReportContext:
    """Everything the page builders read; results are kept in iteration order."""

    results: tuple[IterationResult, ...]
    durations: Mapping[int, float] = field(default_factory=dict)
    style: FormatStyle = field(default_factory=FormatStyle)
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    run_metadata: RunMetadata | None = None

    @property
    def formatter(self) -> ResultFormatter:
        return ResultFormatter(self.style)

    @property
    def results_formatter(self) -> ResultsFormatter:
        return ResultsFormatter(self.style)


def build_report_context(
    results: Iterable[IterationResult],
    *,
    durations: Mapping[int, float] | None = None,
    style: FormatStyle | None = None,
    generated_at: datetime | None = None,
    run_metadata: RunMetadata | None = None,
) -> ReportContext:
    return ReportContext(
        results=sort_by_iteration(results),
        durations=dict(durations or {}),
        style=style or FormatStyle(),
        generated_at=generated_at or datetime.now(UTC),
        run_metadata=run_metadata,
    )


def build_page_context(page: ReportPage, context: ReportContext) -> dict[str, object]:
    """Compute the template variables of ``page``, including the shared layout values."""
    values: dict[str, object] = {
        "title": f"{REPORT_TITLE}: {page.heading}",
        "navigation": _navigation(page),
        "generated_at": context.formatter.timestamp(
            context.generated_at, TimestampOptions(**_VALUE_ONLY)
        ),
    }
    values.update(_PAGE_BUILDERS[page](context))
    return values


def render_page(
    page: ReportPage,
    context: ReportContext,
    *,
    template_dir: Path | str | None = None,
    environment: Environment | None = None,
) -> str:
    environment = environment or page_environment(template_dir)
    rendered = environment.get_template(page.file_name).render(build_page_context(page, context))
    unresolved = sorted(set(PLACEHOLDER_PATTERN.findall(rendered)))
    if unresolved:
        logger.warning(
            "Report page %s has unresolved markers: %s", page.value, ", ".join(unresolved)
        )
    return rendered


def write_html_report(
    context: ReportContext,
    output_root: Path | str,
    *,
    template_dir: Path | str | None = None,
) -> dict[ReportPage, Path]:
    """Render every report page to ``<output_root>/report/<page>.html``.

    Raises:
      OSError: If a page cannot be written.
      jinja2.TemplateError: If a template in ``template_dir`` is malformed.
    """
    environment = page_environment(template_dir)
    written: dict[ReportPage, Path] = {}
    for page in ReportPage:
        destination = report_page_path(output_root, page)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(
            render_page(page, context, environment=environment), encoding="utf-8"
        )
        written[page] = destination.resolve()
    return written


@dataclass(frozen=True)
class _NavigationLink:
    href: str
    heading: str
    active: bool


@dataclass(frozen=True)
class _FilterColumn:
    header: str
    column_id: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class _TableCell:
    column_id: str
    text: str
    href: str | None = None


@dataclass(frozen=True)
class _TableRow:
    cells: tuple[_TableCell, ...]


@dataclass(frozen=True)
class _ExitCodeRow:
    label: str
    count: int
    share: str
    iterations: str


@dataclass(frozen=True)
class _MessageRow:
    label: str
    messages: str
    count: int
    iterations: str


@dataclass(frozen=True)
class _TimeEntry:
    label: str
    text: str
    milliseconds: str


@dataclass(frozen=True)
class _MapCard:
    card_id: str
    iteration_number: int
    map_file_name: str
    sequence: str
    map_text: str
    attribute: str
    path: str


@dataclass(frozen=True)
class _ExitCodeSection:
    code: int
    label: str
    count: int
    share: str
    cards: tuple[_MapCard, ...]


@dataclass(frozen=True)
class _HomeColumn:
    header: str
    render: Callable[[ResultFormatter, IterationResult], str]
    links_to_card: bool = False

    @property
    def column_id(self) -> str:
        return _id_name(self.header)


_HOME_COLUMNS: tuple[_HomeColumn, ...] = (
    _HomeColumn(
        "Iteration Number",
        lambda fmt, result: fmt.iteration_number(result, IterationNumberOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Exit Code",
        lambda fmt, result: fmt.exit_code(result, CodeOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Error Code",
        lambda fmt, result: fmt.error_code(result, CodeOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Output Messages",
        lambda fmt, result: fmt.output_messages(result, OutputMessagesOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Action Sequence",
        lambda fmt, result: fmt.string_sequence(
            result, StringSequenceOptions(full_text=False, **_VALUE_ONLY)
        ),
    ),
    _HomeColumn(
        "Map File Name",
        lambda fmt, result: fmt.map_file_name(result, MapFileNameOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Map File Type",
        lambda fmt, result: fmt.map_file_type(
            result, MapFileTypeOptions(describe=False, **_VALUE_ONLY)
        ),
    ),
    _HomeColumn(
        "Map File Custom Attribute",
        lambda fmt, result: fmt.custom_attribute(result, CustomAttributeOptions(**_VALUE_ONLY)),
    ),
    _HomeColumn(
        "Absolute Map File Path",
        lambda fmt, result: fmt.map_file_path(result, MapFilePathOptions(**_VALUE_ONLY)),
        links_to_card=True,
    ),
)


def _home_context(context: ReportContext) -> dict[str, object]:
    formatter = context.formatter
    rendered_rows = [
        [column.render(formatter, result) for column in _HOME_COLUMNS]
        for result in context.results
    ]
    columns = tuple(
        _FilterColumn(
            header=column.header,
            column_id=column.column_id,
            values=tuple(sorted({row[index] for row in rendered_rows})),
        )
        for index, column in enumerate(_HOME_COLUMNS)
    )
    rows = tuple(
        _TableRow(
            cells=tuple(
                _TableCell(
                    column_id=column.column_id,
                    text=text,
                    href=(
                        f"{ReportPage.ALL_MAPS.file_name}#{_card_id(result)}"
                        if column.links_to_card
                        else None
                    ),
                )
                for column, text in zip(_HOME_COLUMNS, cells, strict=True)
            )
        )
        for result, cells in zip(context.results, rendered_rows, strict=True)
    )
    return {"columns": columns, "rows": rows}


def _about_context(_context: ReportContext) -> dict[str, object]:
    return {
        "action_legend": tuple(ACTION_NAMES.items()),
        "map_legend": tuple(MAP_CELL_NAMES.items()),
    }


def _overview_context(context: ReportContext) -> dict[str, object]:
    formatter = context.formatter
    results_formatter = context.results_formatter
    total = len(context.results)

    exit_code_rows = tuple(
        _ExitCodeRow(
            label=formatter.exit_code(group[0], CodeOptions(**_VALUE_ONLY)),
            count=len(group),
            share=f"{percentage(len(group), total):.2f}%",
            iterations=results_formatter.iteration_numbers(
                group, IterationNumbersOptions(**_VALUE_ONLY)
            ),
        )
        for group in group_by_exit_code(context.results).values()
    )
    message_rows = tuple(
        _MessageRow(
            label=str(row.exit_code),
            messages="; ".join(row.output_messages) or context.style.placeholder,
            count=row.count,
            iterations="-".join(str(number) for number in row.iteration_numbers),
        )
        for row in build_overview_rows(context.results)
    )
    summary = execution_time_summary(context.results, context.durations)
    return {
        "total_iterations": results_formatter.total_iterations(
            context.results, TotalIterationsOptions(separator=False)
        ),
        "exit_code_rows": exit_code_rows,
        "message_rows": message_rows,
        "execution_times": _execution_time_entries(formatter, summary),
        "measured_iterations": summary.count,
        "conclusions": _conclusions(context),
    }


def _all_maps_context(context: ReportContext) -> dict[str, object]:
    formatter = context.formatter
    total = len(context.results)
    sections = tuple(
        _ExitCodeSection(
            code=code,
            label=formatter.exit_code(group[0], CodeOptions(**_VALUE_ONLY)),
            count=len(group),
            share=f"{percentage(len(group), total):.0f}",
            cards=tuple(_map_card(formatter, result) for result in group),
        )
        for code, group in group_by_exit_code(context.results).items()
    )
    return {"sections": sections, "total": total}


def _welcome_context(context: ReportContext) -> dict[str, object]:
    formatter = context.formatter
    lines = [
        context.results_formatter.total_iterations(
            context.results, TotalIterationsOptions(separator=False)
        ),
        formatter.timestamp(context.generated_at, TimestampOptions(separator=False)),
    ]
    metadata = context.run_metadata
    if metadata is not None:
        lines.append(f"Output Directory: {metadata.output_dir}")
        lines.append(
            formatter.execution_time(metadata.elapsed_ms, ExecutionTimeOptions(separator=False))
        )
        if metadata.seed is not None:
            lines.append(f"Seed: {metadata.seed}")
        if metadata.map_file_type is not None:
            lines.append(f"Map File Type Selector: {metadata.map_file_type.value}")
        if metadata.stop_reason:
            lines.append(f"Stopped Because: {metadata.stop_reason}")
    return {"summary_lines": tuple(lines)}


_PAGE_BUILDERS: dict[ReportPage, Callable[[ReportContext], dict[str, object]]] = {
    ReportPage.HOME: _home_context,
    ReportPage.ABOUT: _about_context,
    ReportPage.OVERVIEW: _overview_context,
    ReportPage.ALL_MAPS: _all_maps_context,
    ReportPage.WELCOME: _welcome_context,
}


def _map_card(formatter: ResultFormatter, result: IterationResult) -> _MapCard:
    return _MapCard(
        card_id=_card_id(result),
        iteration_number=result.iteration_number,
        map_file_name=result.map_file_name,
        sequence=formatter.string_sequence(result, StringSequenceOptions(**_VALUE_ONLY)),
        map_text=formatter.map_file_text(
            _stored_map_text(result), MapFileTextOptions(full_text=False, **_VALUE_ONLY)
        ),
        attribute=formatter.custom_attribute(result, CustomAttributeOptions(separator=False)),
        path=formatter.map_file_path(result, MapFilePathOptions(separator=False)),
    )


def _stored_map_text(result: IterationResult) -> str | None:
    if result.map_file_type is not MapFileType.TEXT or not result.map_file_path:
        return None
    path = Path(result.map_file_path)
    if not path.is_file():
        return None
    return read_map_text(path)


def _execution_time_entries(
    formatter: ResultFormatter, summary: ExecutionTimeSummary
) -> tuple[_TimeEntry, ...]:
    if summary.count == 0:
        return ()
    options = ExecutionTimeOptions(label=False, separator=False)
    entries = (
        ("Fastest iteration", summary.minimum_ms),
        ("Slowest iteration", summary.maximum_ms),
        ("Mean iteration", summary.mean_ms),
    )
    return tuple(
        _TimeEntry(
            label=label,
            text=formatter.execution_time(value, options),
            milliseconds=f"{value:.0f}",
        )
        for label, value in entries
        if value is not None
    )


def _conclusions(context: ReportContext) -> tuple[str, ...]:
    results = context.results
    if not results:
        return ()
    total = len(results)
    most_common = build_overview_rows(results)[0]
    unknown = sum(1 for result in results if result.error_code == UNKNOWN_ERROR_CODE)
    messages = "; ".join(most_common.output_messages) or context.style.placeholder
    return (
        f"The most frequent outcome is exit code {most_common.exit_code} with output "
        f"'{messages}' ({most_common.count} of {total} iterations, "
        f"{percentage(most_common.count, total):.2f}%).",
        f"{len(unique_values(results, ResultField.OUTPUT_MESSAGES))} distinct output message "
        f"sets were observed.",
        f"{len(unique_values(results, ResultField.STRING_SEQUENCE))} distinct action sequences "
        f"were executed.",
        f"{unknown} iterations ({percentage(unknown, total):.2f}%) ended with an unknown "
        f"exit code.",
    )


def _navigation(current: ReportPage) -> tuple[_NavigationLink, ...]:
    return tuple(
        _NavigationLink(href=page.file_name, heading=page.heading, active=page is current)
        for page in ReportPage
    )


def _card_id(result: IterationResult) -> str:
    return f"card-{result.iteration_number}"


def _id_name(header: str) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in header.split())
