"""Tests for the generator contract: run/execute, execute_step and batches."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from mdgen.definition_path import DefinitionPath
from mdgen.errors import InvalidArgumentError
from mdgen.generator import (
    AbstractGenerator,
    BatchReport,
    ErrorKind,
    GenerationResult,
    Generator,
    execute_all,
    execute_step,
)
from mdgen.writer import write_markdown


# ---------------------------------------------------------------------------
# Sample generators
# ---------------------------------------------------------------------------


class SucceedingGenerator(AbstractGenerator):
    def run(self) -> bool:
        return True


class RefusingGenerator(AbstractGenerator):
    def run(self) -> bool:
        return False


class RaisingGenerator(AbstractGenerator):
    def run(self) -> bool:
        raise RuntimeError("definition is corrupt")


class IOErrorGenerator(AbstractGenerator):
    def run(self) -> bool:
        Path(self.get_file_path()).read_text(encoding="utf-8")
        return True


class MarkdownGenerator(AbstractGenerator):
    """Copies the definition's title into README.md under the package path."""

    def run(self) -> bool:
        title = Path(self.get_file_path()).read_text(encoding="utf-8").strip()
        if not title:
            return False
        write_markdown(self.get_output_path("org.thinkit"), "README.md", f"# {title}\n")
        return True


@pytest.fixture
def definition(tmp_path: Path) -> DefinitionPath:
    source = tmp_path / "definition.txt"
    source.write_text("Sample API\n", encoding="utf-8")
    return DefinitionPath.of(str(source), str(tmp_path / "out"))


# ---------------------------------------------------------------------------
# AbstractGenerator.execute
# ---------------------------------------------------------------------------


class TestExecute:
    def test_run_true(self, definition: DefinitionPath) -> None:
        assert SucceedingGenerator(definition).execute() is True

    def test_run_false(self, definition: DefinitionPath) -> None:
        assert RefusingGenerator(definition).execute() is False

    def test_run_raises(self, definition: DefinitionPath) -> None:
        assert RaisingGenerator(definition).execute() is False

    def test_io_error_contained(self, tmp_path: Path) -> None:
        missing = DefinitionPath.of(str(tmp_path / "missing.txt"), str(tmp_path))
        assert IOErrorGenerator(missing).execute() is False

    def test_exception_with_broken_str(self, definition: DefinitionPath) -> None:
        class Unprintable(Exception):
            def __str__(self) -> str:
                raise RuntimeError("cannot render")

        class UnprintableGenerator(AbstractGenerator):
            def run(self) -> bool:
                raise Unprintable()

        gen = UnprintableGenerator(definition)
        assert gen.execute() is False
        result = gen.execute_with_result()
        assert result.error_type == "Unprintable"
        assert result.message == "Unprintable"

    def test_exception_without_message(self, definition: DefinitionPath) -> None:
        class SilentGenerator(AbstractGenerator):
            def run(self) -> bool:
                raise ValueError()

        result = SilentGenerator(definition).execute_with_result()
        assert result.message == "ValueError"

    def test_failure_logged_with_traceback(
        self, definition: DefinitionPath, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="mdgen.generator"):
            RaisingGenerator(definition).execute()
        records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert records
        assert "definition is corrupt" in records[0].getMessage()
        assert records[0].exc_info is not None

    def test_none_definition_path(self) -> None:
        with pytest.raises(InvalidArgumentError):
            SucceedingGenerator(None)

    def test_is_a_generator(self, definition: DefinitionPath) -> None:
        assert isinstance(SucceedingGenerator(definition), Generator)

    def test_cannot_instantiate_without_run(self, definition: DefinitionPath) -> None:
        with pytest.raises(TypeError):
            AbstractGenerator(definition)

    def test_writes_output(self, definition: DefinitionPath) -> None:
        assert MarkdownGenerator(definition).execute() is True
        readme = Path(definition.get_output_path("org.thinkit")) / "README.md"
        assert readme.read_text(encoding="utf-8") == "# Sample API\n"


class TestAccessors:
    def test_paths_delegate_to_definition(self, definition: DefinitionPath) -> None:
        gen = SucceedingGenerator(definition)
        assert gen.get_file_path() == definition.get_file_path()
        assert gen.get_output_path() == definition.get_output_path()
        assert gen.get_output_path("a.b") == definition.get_output_path() + os.sep + "a" + os.sep + "b"

    def test_none_package(self, definition: DefinitionPath) -> None:
        with pytest.raises(InvalidArgumentError):
            SucceedingGenerator(definition).get_output_path(None)

    def test_equality(self, definition: DefinitionPath) -> None:
        assert SucceedingGenerator(definition) == SucceedingGenerator(definition)
        assert SucceedingGenerator(definition) != RefusingGenerator(definition)


# ---------------------------------------------------------------------------
# execute_step / execute_with_result
# ---------------------------------------------------------------------------


class TestExecuteStep:
    def test_success(self) -> None:
        result = execute_step(lambda: True, name="ok")
        assert result.success
        assert result.error_kind is None
        assert bool(result) is True

    def test_returned_false(self) -> None:
        result = execute_step(lambda: False, name="refuse")
        assert not result.success
        assert result.error_kind is ErrorKind.STEP_RETURNED_FALSE

    def test_raised(self) -> None:
        def boom() -> bool:
            raise KeyError("title")

        result = execute_step(boom)
        assert not result.success
        assert result.error_kind is ErrorKind.GENERATION_FAILURE
        assert result.error_type == "KeyError"
        assert "title" in result.message
        assert result.step.endswith("boom")

    def test_execute_with_result_keeps_detail(self, definition: DefinitionPath) -> None:
        result = RaisingGenerator(definition).execute_with_result()
        assert result.step == "RaisingGenerator"
        assert result.error_type == "RuntimeError"
        assert result.message == "definition is corrupt"


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------


class TestExecuteAll:
    def test_failure_does_not_stop_batch(self, definition: DefinitionPath) -> None:
        calls: list[str] = []

        def last() -> bool:
            calls.append("last")
            return True

        report = execute_all([
            RaisingGenerator(definition),
            RefusingGenerator(definition),
            SucceedingGenerator(definition),
            last,
        ])
        assert calls == ["last"]
        assert len(report.results) == 4
        assert len(report.succeeded) == 2
        assert len(report.failed) == 2
        assert report.success is False

    def test_all_succeed(self, definition: DefinitionPath) -> None:
        report = execute_all([SucceedingGenerator(definition), lambda: True])
        assert report.success is True

    def test_plain_generator_that_raises(self) -> None:
        class Broken(Generator):
            def execute(self) -> bool:
                raise RuntimeError("broken")

        report = execute_all([Broken()])
        assert report.results[0].error_kind is ErrorKind.GENERATION_FAILURE
        assert report.results[0].step == "Broken"

    def test_empty_batch(self) -> None:
        report = execute_all([])
        assert report.results == []
        assert report.success is True

    def test_markdown_report(self, definition: DefinitionPath, tmp_path: Path) -> None:
        report = execute_all([SucceedingGenerator(definition), RaisingGenerator(definition)])
        md = report.to_markdown()
        assert md.startswith("# Generation Report")
        assert "1 succeeded, 1 failed" in md
        assert "| OK | SucceedingGenerator |" in md
        assert "| FAIL | RaisingGenerator | definition is corrupt |" in md

        path = report.write(tmp_path / "reports")
        assert path.name == "GENERATION_REPORT.md"
        assert path.read_text(encoding="utf-8") == md

    def test_pipe_escaped(self) -> None:
        report = BatchReport(results=[GenerationResult(step="s", message="a|b")])
        assert "a\\|b" in report.to_markdown()

    def test_multiline_message_stays_in_one_row(self) -> None:
        report = BatchReport(results=[
            GenerationResult(step="multi|step", message="line one\nline two\r\nline three\n"),
        ])
        rows = [line for line in report.to_markdown().splitlines() if line.startswith("| FAIL")]
        assert rows == ["| FAIL | multi\\|step | line one<br>line two<br>line three |"]
