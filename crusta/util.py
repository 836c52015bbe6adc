r"""the public entry points, as funcpipes.Pipe objects

They can be called directly:

>>> list(stdout_lines(execute('echo abc')))
['abc']

or chained like in a shell:

>>> 'echo abc' | execute | stdout_lines | to(list)
['abc']

and partially applied:

>>> 'echo $0' | run.sh | to.result
'sh'
"""

__all__ = (
    'to', 'get',
    'execute', 'run', 'kill', 'exit_code',
    'stdin_stream', 'stdout_stream', 'stderr_stream',
    'stdout_lines', 'stderr_lines',
    'pipe',
)

import logging
from concurrent.futures import Future
from signal import SIGTERM

from funcpipes import Pipe, to, get
from . import pipeline
from .lines import line_sequence
from .process import Process, AbnormalTermination
from .thread import Thread

logger = logging.getLogger(__name__)


@Pipe
def execute(command, **options):
    r"""start a Process, see help(Process) for the options

    Does not wait for the process; failing to start it raises LaunchFailure.
    """
    return Process(command, **options)


@Pipe
def kill(process, sig=SIGTERM):
    """send a signal (SIGTERM by default) to the process"""
    process.kill(sig)


@Pipe
def exit_code(process, timeout=None):
    """exit code of the process, or TIMEOUT if timeout seconds go by first"""
    return process.exit_code(timeout)


@Pipe
def stdin_stream(process):
    """writable binary stream connected to the stdin of the process"""
    return process.stdin


@Pipe
def stdout_stream(process):
    """readable binary stream with the stdout of the process"""
    return process.stdout


@Pipe
def stderr_stream(process):
    """readable binary stream with the stderr of the process

    None if it was started with redirect_stderr.
    """
    return process.stderr


@Pipe
def stdout_lines(process, encoding='utf-8', errors='strict'):
    """lazy sequence of the lines of text in stdout of the process"""
    return process.stdout_lines(encoding, errors)


@Pipe
def stderr_lines(process, encoding='utf-8', errors='strict'):
    """lazy sequence of the lines of text in stderr of the process

    None if it was started with redirect_stderr.
    """
    return process.stderr_lines(encoding, errors)


@Pipe
def pipe(*processes):
    """chain running processes stdout-to-stdin, see crusta.pipeline.pipe"""
    return pipeline.pipe(*processes)


def feed(stream, data):
    try:
        with stream:
            if data is not None:
                stream.write(data.encode() if isinstance(data, str) else data)
    except BrokenPipeError:
        logger.debug('child exited before reading all of its input')


def drain(stream):
    lines = line_sequence(stream)
    return '' if lines is None else '\n'.join(lines)


def capture(command, input=None, **options):
    """run the command to completion and return its stdout

    Raises AbnormalTermination if it exits with a non-zero status.
    """
    process = Process(command, **options)
    feeder = Thread(lambda: feed(process.stdin, input), name=f'feed-{process.pid}').start()
    drainer = Thread(lambda: drain(process.stderr), name=f'drain-{process.pid}').start()
    try:
        stdout = drain(process.stdout)
    finally:
        process.stdout.close()
        try:
            stderr = drainer.join()
            feeder.join()
        finally:
            status = process.exit_code()
    if status != 0:
        raise AbnormalTermination(command, process, status, stdout, stderr)
    return stdout


@Pipe
def run(command, input=None, **options):
    r"""run a command on its own thread and return a Future with its stdout

    The stdout is the lines of text the process printed, joined with '\n':

    >>> run('printf "a\\nb\\n"').result()
    'a\nb'

    If the process exits with a non-zero status, the Future fails with
    AbnormalTermination, which holds both stdout and stderr:

    >>> try: run('sh -c "echo oops >&2; exit 3"').result()
    ... except AbnormalTermination as e: e.exit_code, e.stdout, e.stderr
    ...
    (3, '', 'oops')

    input: str or bytes written to the stdin of the process, which is then
           closed; with no input, stdin is closed straight away
    options: same as for Process

    NOTE: all the output is kept in memory. For large or endless output, use
    execute() and read the streams instead.
    """
    future = Future()

    def target():
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(capture(command, input, **options))
        except Exception as e:
            future.set_exception(e)

    Thread(target, name=f'run-{command!r}').start()
    return future


for func in execute, run:
    func.sh = func.partial(wrap_shell=True)
