"""
Tests for line sources and the parse logs use case.
"""

import pytest
from io import StringIO

import accesslog
from accesslog.application import ErrorPolicy, LineParserPort, LogSourcePort, ParseLogsUseCase
from accesslog.core.exceptions import FailureReason, InvalidNumericFieldError, MalformedLogLineError
from accesslog.core.models import LogFormat
from accesslog.infrastructure import FileStreamSource, StdinStreamSource
from accesslog.parsers import LogLineParser


class ListSource:
    """In-memory source for use case tests."""

    def __init__(self, lines: list[str]):
        self.lines = lines

    def read_lines(self):
        yield from self.lines

    def metadata(self) -> dict[str, str]:
        return {"source_type": "memory", "path": "<memory>"}


class TestFileStreamSource:
    """Tests for FileStreamSource."""

    def test_read_lines(self, tmp_path):
        """Test basic line reading."""
        log_file = tmp_path / "access.log"
        log_file.write_text("line1\nline2\nline3\n")

        source = FileStreamSource(log_file)
        assert list(source.read_lines()) == ["line1", "line2", "line3"]

    def test_strips_newlines(self, tmp_path):
        """Test that CRLF and LF endings are stripped."""
        log_file = tmp_path / "access.log"
        log_file.write_bytes(b"line1\r\nline2\nline3\r\n")

        source = FileStreamSource(log_file)
        assert list(source.read_lines()) == ["line1", "line2", "line3"]

    def test_file_not_found(self):
        """Test FileNotFoundError for missing file."""
        with pytest.raises(FileNotFoundError):
            FileStreamSource("/nonexistent/access.log")

    def test_invalid_bytes_replaced(self, tmp_path):
        """Test undecodable bytes do not stop reading."""
        log_file = tmp_path / "access.log"
        log_file.write_bytes(b"ok\n\xff\xfe broken\n")

        lines = list(FileStreamSource(log_file).read_lines())
        assert lines[0] == "ok"
        assert lines[1].endswith(" broken")

    def test_metadata(self, tmp_path):
        """Test source metadata."""
        log_file = tmp_path / "access.log"
        log_file.write_text("some content\n")

        meta = FileStreamSource(log_file).metadata()
        assert meta["source_type"] == "file"
        assert meta["name"] == "access.log"
        assert meta["path"] == str(log_file)
        assert meta["size_bytes"] == "13"

    def test_symlink_warns(self, tmp_path):
        """Test a symlinked log file is read with a warning."""
        target = tmp_path / "access.log.1"
        target.write_text("line1\n")
        link = tmp_path / "access.log"
        link.symlink_to(target)

        with pytest.warns(UserWarning):
            source = FileStreamSource(link)
        assert list(source.read_lines()) == ["line1"]

    def test_implements_port(self, access_log_file):
        """Test the adapter satisfies LogSourcePort."""
        assert isinstance(FileStreamSource(access_log_file), LogSourcePort)


class TestStdinStreamSource:
    """Tests for StdinStreamSource."""

    def test_read_lines(self):
        """Test reading from a supplied stream."""
        source = StdinStreamSource(stream=StringIO("a\nb\r\n"))
        assert list(source.read_lines()) == ["a", "b"]

    def test_metadata_counts_lines(self):
        """Test the line count after reading."""
        source = StdinStreamSource(stream=StringIO("a\nb\nc\n"))
        list(source.read_lines())
        meta = source.metadata()
        assert meta["source_type"] == "stdin"
        assert meta["lines_read"] == "3"

    def test_reads_sys_stdin_by_default(self, monkeypatch):
        """Test sys.stdin is looked up at read time."""
        monkeypatch.setattr("sys.stdin", StringIO("x\n"))
        assert list(StdinStreamSource().read_lines()) == ["x"]


class TestParseLogsUseCase:
    """Tests for ParseLogsUseCase."""

    def test_skip_collects_failures(self, common_line, combined_line, malformed_line):
        """Test malformed lines are recorded and parsing continues."""
        source = ListSource([common_line, malformed_line, "", combined_line])
        use_case = ParseLogsUseCase(source=source)

        records = list(use_case.execute())

        assert [r.log_format for r in records] == [LogFormat.COMMON, LogFormat.COMBINED]
        assert len(use_case.failures) == 1
        failure = use_case.failures[0]
        assert failure.line_number == 2
        assert failure.line == malformed_line
        assert failure.reason is FailureReason.UNTERMINATED_BRACKET
        assert failure.error.line_number == 2

    def test_abort_raises_first_failure(self, common_line, malformed_line):
        """Test the abort policy stops at the first malformed line."""
        source = ListSource([common_line, "", malformed_line, common_line])
        use_case = ParseLogsUseCase(source=source, error_policy=ErrorPolicy.ABORT)

        records = []
        with pytest.raises(MalformedLogLineError) as exc_info:
            for record in use_case.execute():
                records.append(record)

        assert len(records) == 1
        assert exc_info.value.line_number == 3

    def test_policy_from_string(self, common_line):
        """Test policies can be given by name."""
        use_case = ParseLogsUseCase(source=ListSource([common_line]), error_policy="abort")
        assert use_case.error_policy is ErrorPolicy.ABORT

    def test_custom_parser(self, common_line):
        """Test a configured parser is used."""
        line = common_line.replace(" 2326", " -")
        strict = ParseLogsUseCase(source=ListSource([line]), error_policy=ErrorPolicy.ABORT)
        with pytest.raises(InvalidNumericFieldError):
            list(strict.execute())

        lenient = ParseLogsUseCase(
            source=ListSource([line]),
            parser=LogLineParser(dash_as_zero=True),
        )
        assert [r.object_size for r in lenient.execute()] == [0]

    def test_parser_implements_port(self):
        """Test LogLineParser satisfies LineParserPort."""
        assert isinstance(LogLineParser(), LineParserPort)

    def test_collect(self, mixed_log_file):
        """Test collecting a file into a ParseResult."""
        use_case = ParseLogsUseCase(source=FileStreamSource(mixed_log_file))
        result = use_case.collect()

        assert result.record_count == 2
        assert result.failure_count == 1
        assert result.common_count == 1
        assert result.combined_count == 1
        assert result.source_file == str(mixed_log_file)

    def test_skip_survives_oversized_number(self, common_line):
        """Test an unconvertible digit string is collected, not fatal."""
        huge = common_line.replace(" 2326", " " + "9" * 5000)
        use_case = ParseLogsUseCase(source=ListSource([huge, common_line]))

        records = list(use_case.execute())

        assert len(records) == 1
        assert len(use_case.failures) == 1
        assert use_case.failures[0].line_number == 1
        assert isinstance(use_case.failures[0].error, InvalidNumericFieldError)

    def test_execute_resets_failures(self, malformed_line):
        """Test failures from a previous run are not carried over."""
        use_case = ParseLogsUseCase(source=ListSource([malformed_line]))
        list(use_case.execute())
        list(use_case.execute())
        assert len(use_case.failures) == 1


class TestConvenienceFunctions:
    """Tests for package level helpers."""

    def test_parse_file(self, access_log_file):
        """Test parsing a valid file."""
        result = accesslog.parse_file(str(access_log_file))
        assert result.record_count == 7
        assert result.failure_count == 0
        assert result.common_count == 3
        assert result.combined_count == 4

    def test_parse_file_skip(self, mixed_log_file):
        """Test malformed lines are collected by default."""
        result = accesslog.parse_file(str(mixed_log_file))
        assert result.record_count == 2
        assert result.failures[0].line_number == 2

    def test_parse_file_abort(self, mixed_log_file):
        """Test abort raises the first error."""
        with pytest.raises(MalformedLogLineError):
            accesslog.parse_file(str(mixed_log_file), error_policy="abort")

    def test_stream_parse(self, access_log_file):
        """Test streaming a valid file."""
        records = list(accesslog.stream_parse(str(access_log_file)))
        assert len(records) == 7
        assert records[0].remote_host == "192.168.1.100"

    def test_stream_parse_stops_on_error(self, mixed_log_file):
        """Test streaming stops at the malformed line."""
        stream = accesslog.stream_parse(str(mixed_log_file))
        assert next(stream).log_format is LogFormat.COMMON
        with pytest.raises(MalformedLogLineError) as exc_info:
            next(stream)
        assert exc_info.value.line_number == 2
