"""Tests for the pipe-able entry points."""

import sys
from concurrent.futures import Future

import pytest

from crusta import (
    TIMEOUT, Process, Pipeline,
    execute, run, kill, exit_code, pipe, to,
    stdin_stream, stdout_stream, stderr_stream,
    stdout_lines, stderr_lines,
)

pytestmark = pytest.mark.skipif(sys.platform == 'win32', reason='needs POSIX utilities')


class TestCalls:
    def test_execute(self):
        process = execute('echo abc')
        assert isinstance(process, Process)
        assert list(stdout_lines(process)) == ['abc']
        assert exit_code(process) == 0

    def test_stream_accessors(self):
        process = execute('true')
        assert stdin_stream(process) is process.stdin
        assert stdout_stream(process) is process.stdout
        assert stderr_stream(process) is process.stderr

    def test_stderr_lines(self):
        process = execute(['sh', '-c', ['echo oops >&2']])
        assert list(stderr_lines(process)) == ['oops']

    def test_redirected_stderr(self):
        process = execute('true', redirect_stderr=True)
        assert stderr_stream(process) is None
        assert stderr_lines(process) is None

    def test_kill_and_timeout(self):
        process = execute('sleep 10')
        assert exit_code(process, timeout=0.001) is TIMEOUT
        kill(process)
        assert exit_code(process) < 0

    def test_kill_with_signal(self):
        process = execute('sleep 10')
        kill(process, 'SIGKILL')
        assert exit_code(process) == -9

    def test_run(self):
        future = run('echo abc')
        assert isinstance(future, Future)
        assert future.result() == 'abc'

    def test_pipe(self):
        pipeline = pipe(execute('echo abc'), execute('tr a-z A-Z'))
        assert isinstance(pipeline, Pipeline)
        assert list(pipeline.stdout_lines()) == ['ABC']


class TestChaining:
    def test_execute_into_lines(self):
        assert 'echo abc' | execute | stdout_lines | to(list) == ['abc']

    def test_exit_code(self):
        assert execute('true') | exit_code == 0

    def test_partial(self):
        process = execute('sleep 10')
        try:
            assert process | exit_code.partial(timeout=0.001) is TIMEOUT
        finally:
            kill(process)

    def test_shell_partials(self):
        assert run.sh('echo $0').result() == 'sh'
        assert list(execute.sh('echo a; echo b').stdout_lines()) == ['a', 'b']

    def test_run_future(self):
        assert 'echo hi' | run | to.result == 'hi'
