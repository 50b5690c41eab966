from __future__ import annotations

import logging
from pathlib import Path

import pytest

from helpers import write_document, write_file
from pcp.core.composition.context import WalkContext
from pcp.core.composition.executor import execute_document, execute_operation
from pcp.core.composition.types import CommandRef, FileRef, OperationKind, TextLiteral
from pcp.core.exceptions import (
    BinaryFileError,
    CircularReferenceError,
    CommandFailedError,
    SourceFileNotFoundError,
    WordLimitExceededError,
)


def _ctx(base: Path, **kwargs) -> WalkContext:
    kwargs.setdefault("max_words", 1000)
    return WalkContext(base_dir=base, **kwargs)


class TestFileOperations:
    def test_content_is_exact_file_text(self, tmp_path: Path):
        raw = "first line\r\nsecond\tline\n\n  trailing spaces  "
        write_file(tmp_path / "notes.txt", raw)
        section = execute_operation(FileRef("notes.txt"), _ctx(tmp_path))
        assert section.content == raw
        assert section.source == "notes.txt"
        assert section.kind is OperationKind.FILE

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceFileNotFoundError) as exc:
            execute_operation(FileRef("missing.txt"), _ctx(tmp_path))
        assert exc.value.file == str(tmp_path / "missing.txt")

    def test_nul_byte_in_prefix_is_binary(self, tmp_path: Path):
        write_file(tmp_path / "image.bin", b"PNG\x00\x01\x02")
        with pytest.raises(BinaryFileError, match="cannot process binary file"):
            execute_operation(FileRef("image.bin"), _ctx(tmp_path))

    def test_nul_byte_past_sniff_window_is_text(self, tmp_path: Path):
        write_file(tmp_path / "late.txt", b"abcdefgh\x00")
        section = execute_operation(FileRef("late.txt"), _ctx(tmp_path, binary_sniff_bytes=8))
        assert section.content == "abcdefgh\x00"

    def test_words_are_counted(self, tmp_path: Path):
        write_file(tmp_path / "words.txt", "one two\nthree\tfour  five\n")
        ctx = _ctx(tmp_path)
        execute_operation(FileRef("words.txt"), ctx)
        assert ctx.word_count == 5


class TestCommandOperations:
    def test_exit_zero_captures_stdout_and_stderr(self, tmp_path: Path):
        op = CommandRef("echo out; echo err 1>&2")
        section = execute_operation(op, _ctx(tmp_path))
        assert section.content == "out\nerr\n"
        assert section.source == "echo out; echo err 1>&2"
        assert section.kind is OperationKind.COMMAND

    def test_exit_one_warns_and_keeps_output(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        section = execute_operation(CommandRef("echo output; exit 1"), _ctx(tmp_path))
        assert section.content == "output\n"
        assert "exited with status 1 but continuing processing" in caplog.text

    def test_exit_two_fails(self, tmp_path: Path):
        with pytest.raises(CommandFailedError) as exc:
            execute_operation(CommandRef("echo output; exit 2"), _ctx(tmp_path))
        assert exc.value.exit_code == 2
        assert exc.value.command == "echo output; exit 2"

    def test_unknown_command_fails(self, tmp_path: Path):
        with pytest.raises(CommandFailedError) as exc:
            execute_operation(CommandRef("definitely-not-a-real-command-pcp"), _ctx(tmp_path))
        assert exc.value.exit_code == 127

    def test_spawn_failure(self, tmp_path: Path):
        ctx = _ctx(tmp_path, shell=str(tmp_path / "no-such-shell"))
        with pytest.raises(CommandFailedError) as exc:
            execute_operation(CommandRef("echo hi"), ctx)
        assert exc.value.exit_code is None

    def test_signal_termination_fails(self, tmp_path: Path):
        with pytest.raises(CommandFailedError, match="terminated by signal 9"):
            execute_operation(CommandRef("kill -9 $$"), _ctx(tmp_path))

    def test_output_counts_against_budget(self, tmp_path: Path):
        with pytest.raises(WordLimitExceededError) as exc:
            execute_operation(CommandRef("echo a b c"), _ctx(tmp_path, max_words=2))
        assert (exc.value.current, exc.value.limit) == (3, 2)


class TestTextOperations:
    def test_text_is_verbatim_with_fixed_source(self, tmp_path: Path):
        section = execute_operation(TextLiteral("  keep\tthis  \n"), _ctx(tmp_path))
        assert section.content == "  keep\tthis  \n"
        assert section.source == "text"
        assert section.kind is OperationKind.TEXT


class TestDocuments:
    def test_one_section_per_operation_in_order(self, tmp_path: Path):
        write_file(tmp_path / "a.txt", "A\n")
        doc = write_document(
            tmp_path / "main.yml",
            {"text": "first"},
            {"file": "a.txt"},
            {"command": "echo third"},
        )
        sections = execute_document(doc, WalkContext.for_document(doc, max_words=100))
        assert [(s.source, s.content) for s in sections] == [
            ("text", "first"),
            ("a.txt", "A\n"),
            ("echo third", "third\n"),
        ]

    def test_nested_prompt_is_expanded_with_provenance_chain(self, tmp_path: Path):
        write_file(tmp_path / "sub" / "x.txt", "X\n")
        write_document(tmp_path / "sub" / "nested.yml", {"text": "hello"}, {"file": "x.txt"})
        doc = write_document(tmp_path / "main.yml", {"prompt": "sub/nested.yml"})

        ctx = WalkContext.for_document(doc, max_words=100, delimiter_style="xml")
        (section,) = execute_document(doc, ctx)

        assert section.source == "sub/nested.yml"
        assert section.kind is OperationKind.PROMPT
        assert section.content == (
            "\n<!-- pcp-source: sub/nested.yml->text -->\n"
            "hello"
            "\n"
            "\n<!-- pcp-source: sub/nested.yml->x.txt -->\n"
            "X\n"
        )
        assert ctx.base_dir == tmp_path
        assert ctx.stack == []

    def test_provenance_chains_through_multiple_levels(self, tmp_path: Path):
        write_document(tmp_path / "a" / "b" / "leaf.yml", {"text": "deep"})
        write_document(tmp_path / "a" / "mid.yml", {"prompt": "b/leaf.yml"})
        doc = write_document(tmp_path / "main.yml", {"prompt": "a/mid.yml"})

        (section,) = execute_document(doc, WalkContext.for_document(doc, max_words=100, delimiter_style="minimal"))
        assert "=== PCP SOURCE: a/mid.yml->b/leaf.yml ===" in section.content
        assert "=== PCP SOURCE: b/leaf.yml->text ===" in section.content

    def test_nested_content_counts_toward_budget_again_when_aggregated(self, tmp_path: Path):
        write_document(tmp_path / "nested.yml", {"text": "one two"})
        doc = write_document(tmp_path / "main.yml", {"prompt": "nested.yml"})
        ctx = WalkContext.for_document(doc, max_words=100, delimiter_style="none")
        execute_document(doc, ctx)
        # two words for the text, two more for the aggregated nested section
        assert ctx.word_count == 4

    def test_circular_reference_detected_without_validation(self, tmp_path: Path):
        write_document(tmp_path / "b.yml", {"prompt": "a.yml"})
        a = write_document(tmp_path / "a.yml", {"prompt": "b.yml"})
        with pytest.raises(CircularReferenceError):
            execute_document(a, WalkContext.for_document(a, max_words=100))

    def test_diamond_inclusion_executes_leaf_twice(self, tmp_path: Path):
        write_document(tmp_path / "leaf.yml", {"text": "leaf"})
        write_document(tmp_path / "left.yml", {"prompt": "leaf.yml"})
        write_document(tmp_path / "right.yml", {"prompt": "leaf.yml"})
        doc = write_document(tmp_path / "main.yml", {"prompt": "left.yml"}, {"prompt": "right.yml"})
        sections = execute_document(doc, WalkContext.for_document(doc, max_words=100))
        assert [s.source for s in sections] == ["left.yml", "right.yml"]
        assert all("leaf.yml->text" in s.content for s in sections)

    def test_budget_failure_stops_before_later_operations(self, tmp_path: Path):
        marker = tmp_path / "ran.txt"
        doc = write_document(
            tmp_path / "main.yml",
            {"text": "a b c"},
            {"command": f"touch {marker}"},
        )
        with pytest.raises(WordLimitExceededError):
            execute_document(doc, WalkContext.for_document(doc, max_words=2))
        assert not marker.exists()

    def test_errors_record_innermost_document_and_index(self, tmp_path: Path):
        nested = write_document(tmp_path / "sub" / "nested.yml", {"text": "ok"}, {"file": "gone.txt"})
        doc = write_document(tmp_path / "main.yml", {"text": "hi"}, {"prompt": "sub/nested.yml"})
        with pytest.raises(SourceFileNotFoundError) as exc:
            execute_document(doc, WalkContext.for_document(doc, max_words=100))
        assert exc.value.context["document"] == str(nested)
        assert exc.value.context["index"] == 1
