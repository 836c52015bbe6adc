"""Tests for lazy line sequences."""

import gc
from io import BytesIO

import pytest

from crusta.lines import LineSequence, line_sequence
from crusta.process import Process, TIMEOUT


class TestLineSequence:
    def test_lines_without_terminators(self):
        assert list(LineSequence(BytesIO(b'one\ntwo\n'))) == ['one', 'two']

    def test_last_line_without_newline(self):
        assert list(LineSequence(BytesIO(b'one\ntwo'))) == ['one', 'two']

    def test_crlf(self):
        assert list(LineSequence(BytesIO(b'one\r\ntwo\r\n'))) == ['one', 'two']

    def test_blank_lines_are_kept(self):
        assert list(LineSequence(BytesIO(b'\n\nx\n'))) == ['', '', 'x']

    def test_empty_stream(self):
        assert list(LineSequence(BytesIO(b''))) == []

    def test_closes_stream_when_exhausted(self):
        stream = BytesIO(b'a\n')
        lines = LineSequence(stream)
        assert next(lines) == 'a'
        assert not stream.closed
        with pytest.raises(StopIteration):
            next(lines)
        assert stream.closed
        assert lines.closed

    def test_stays_exhausted(self):
        lines = LineSequence(BytesIO(b'a\n'))
        assert list(lines) == ['a']
        assert list(lines) == []

    def test_close_early(self):
        stream = BytesIO(b'a\nb\n')
        with LineSequence(stream) as lines:
            assert next(lines) == 'a'
        assert stream.closed
        assert list(lines) == []

    def test_already_closed_stream(self):
        stream = BytesIO(b'a\n')
        stream.close()
        assert list(LineSequence(stream)) == []

    def test_decode_error_propagates(self):
        lines = LineSequence(BytesIO(b'\xff\n'))
        with pytest.raises(UnicodeDecodeError):
            next(lines)

    def test_decode_errors_option(self):
        assert list(LineSequence(BytesIO(b'\xff\n'), errors='replace')) == ['�']

    def test_encoding_option(self):
        assert list(LineSequence(BytesIO('caf\xe9\n'.encode('latin-1')), encoding='latin-1')) == ['caf\xe9']


class TestLineSequenceFunction:
    def test_none(self):
        assert line_sequence(None) is None

    def test_stream(self):
        assert list(line_sequence(BytesIO(b'x\n'))) == ['x']


class TestIncrementalReading:
    def test_lines_arrive_while_process_runs(self):
        process = Process('cat')
        lines = process.stdout_lines()

        process.stdin.write(b'one\n')
        process.stdin.flush()
        assert next(lines) == 'one'
        assert process.poll() is TIMEOUT

        process.stdin.write(b'two\nthree\n')
        process.stdin.close()
        assert list(lines) == ['two', 'three']
        assert process.exit_code() == 0


class TestAbandonedSequence:
    def test_stream_stays_open_after_garbage_collection(self):
        process = Process(['printf', r'a\nb\nc\n'])
        lines = process.stdout_lines()
        assert next(lines) == 'a'
        del lines
        gc.collect()
        assert not process.stdout.closed
        process.stdout.close()
        assert process.exit_code() == 0

    def test_unread_lines_stay_in_the_stream(self):
        process = Process(['printf', r'a\nb\nc\n'])
        assert next(process.stdout_lines()) == 'a'
        assert list(process.stdout_lines()) == ['b', 'c']

    def test_rest_of_stream_can_be_read_directly(self):
        stream = BytesIO(b'one\ntwo\nthree\n')
        assert next(LineSequence(stream)) == 'one'
        assert stream.read() == b'two\nthree\n'
