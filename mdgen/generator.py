"""Generator contract — run a generation step, never let it raise.

Concrete generators subclass :class:`AbstractGenerator` and implement
:meth:`~AbstractGenerator.run`.  Callers only use
:meth:`~AbstractGenerator.execute`, which reduces every outcome to a bool::

    class ReadmeGenerator(AbstractGenerator):
        def run(self) -> bool:
            source = Path(self.get_file_path()).read_text()
            ...
            return True

    ok = ReadmeGenerator(DefinitionPath.of("readme.json")).execute()

Plain callables can go through :func:`execute_step` instead, which returns a
:class:`GenerationResult` that keeps the failure kind and message.
"""

from __future__ import annotations

import abc
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable

from pydantic import BaseModel, Field

from mdgen.definition_path import DefinitionPath
from mdgen.errors import InvalidArgumentError
from mdgen.writer import write_markdown

logger = logging.getLogger(__name__)

REPORT_FILENAME = "GENERATION_REPORT.md"


class ErrorKind(str, Enum):
    """Why a generation step failed."""

    GENERATION_FAILURE = "generation_failure"
    """The step raised."""

    STEP_RETURNED_FALSE = "step_returned_false"
    """The step reported a recognised failure by returning False."""


class GenerationResult(BaseModel):
    """Outcome of one generation step."""

    step: str = ""
    success: bool = False
    error_kind: ErrorKind | None = None
    """None on success."""

    error_type: str | None = None
    """Class name of the exception a failed step raised."""

    message: str = ""

    def __bool__(self) -> bool:
        return self.success


def _describe(exc: BaseException) -> str:
    """Text of *exc*, falling back to its class name when str() fails or is empty."""
    try:
        text = str(exc)
    except Exception:
        text = ""
    return text or type(exc).__name__


def execute_step(step: Callable[[], bool], name: str | None = None) -> GenerationResult:
    """Run *step* and contain any exception it raises.

    Returns a successful result only when *step* returns True.
    """
    name = name or getattr(step, "__qualname__", None) or repr(step)
    try:
        if not step():
            logger.warning("Generation step %s reported failure", name)
            return GenerationResult(
                step=name,
                error_kind=ErrorKind.STEP_RETURNED_FALSE,
                message=f"{name} returned False",
            )
    except Exception as exc:
        message = _describe(exc)
        logger.error(
            "Unexpected error while running generation step %s: %s; "
            "inspect the traceback to find and fix the cause",
            name,
            message,
            exc_info=True,
        )
        return GenerationResult(
            step=name,
            error_kind=ErrorKind.GENERATION_FAILURE,
            error_type=type(exc).__name__,
            message=message,
        )
    return GenerationResult(step=name, success=True)


class Generator(abc.ABC):
    """Anything that can be executed as one generation step."""

    @abc.abstractmethod
    def execute(self) -> bool:
        """Run the generation; True on success.  Must not raise."""


class AbstractGenerator(Generator):
    """Base class for generators driven by a :class:`DefinitionPath`.

    Parameters
    ----------
    definition_path:
        Where the definition is read from and output is written to.
    """

    def __init__(self, definition_path: DefinitionPath) -> None:
        if definition_path is None:
            raise InvalidArgumentError("definition_path must not be None")
        self._definition_path = definition_path

    @abc.abstractmethod
    def run(self) -> bool:
        """Do the generation work.

        Return True on success and False on a recognised failure.
        """

    def execute(self) -> bool:
        return self.execute_with_result().success

    def execute_with_result(self) -> GenerationResult:
        """Like :meth:`execute` but keep the failure details."""
        return execute_step(self.run, name=type(self).__name__)

    def get_file_path(self) -> str:
        return self._definition_path.get_file_path()

    def get_output_path(self, package_name: str | None = "") -> str:
        """Output path, extended by a dotted *package_name* when given."""
        return self._definition_path.get_output_path(package_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._definition_path!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._definition_path == other._definition_path

    def __hash__(self) -> int:
        return hash((type(self), self._definition_path))


class BatchReport(BaseModel):
    """Results of running several independent generation steps."""

    results: list[GenerationResult] = Field(default_factory=list)
    finished_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> list[GenerationResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[GenerationResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.failed

    def to_markdown(self) -> str:
        """Render the batch outcome as a Markdown summary."""
        lines: list[str] = []

        lines.append("# Generation Report")
        lines.append("")
        lines.append(f"**Finished:** {self.finished_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append(f"**Results:** {len(self.succeeded)} succeeded, {len(self.failed)} failed")
        lines.append("")

        if self.results:
            lines.append("| Status | Step | Detail |")
            lines.append("|--------|------|--------|")
            for r in self.results:
                status = "OK" if r.success else "FAIL"
                lines.append(f"| {status} | {_table_cell(r.step)} | {_table_cell(r.message)} |")
            lines.append("")

        return "\n".join(lines)

    def write(self, folder: str | Path, filename: str = REPORT_FILENAME) -> Path:
        """Write the Markdown report to ``<folder>/<filename>``."""
        return write_markdown(folder, filename, self.to_markdown())


def execute_all(steps: Iterable[Generator | Callable[[], bool]]) -> BatchReport:
    """Run every step, collecting results; one failure never stops the batch."""
    report = BatchReport()
    for step in steps:
        if isinstance(step, AbstractGenerator):
            result = step.execute_with_result()
        elif isinstance(step, Generator):
            result = execute_step(step.execute, name=type(step).__name__)
        else:
            result = execute_step(step)
        report.results.append(result)
    report.finished_at = datetime.now(timezone.utc)
    logger.info(
        "Generation batch finished: %d succeeded, %d failed",
        len(report.succeeded),
        len(report.failed),
    )
    return report


def _table_cell(text: str) -> str:
    """Escape *text* so it stays inside one Markdown table cell."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").strip("\n")
    return text.replace("|", "\\|").replace("\n", "<br>")
