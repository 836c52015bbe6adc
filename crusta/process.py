__all__ = (
    'Process', 'TIMEOUT',
    'LaunchFailure', 'AbnormalTermination',
    'change_default_backend',
)

import logging
import os
import threading
from signal import Signals, SIGKILL, SIGTERM
from sys import platform

from .command import prepare_command
from .lines import line_sequence
from .pipe import InputPipe, OutputPipe
from .thread import Thread

logger = logging.getLogger(__name__)


def get_signal(sig: Signals | int | str) -> Signals:
    if isinstance(sig, str):
        sig = sig.upper()
        return Signals[sig if sig.startswith('SIG') else f'SIG{sig}']
    return Signals(sig)


def get_backend(name=None):
    if name == 'subprocess':
        from . import subprocess as backend
        return backend
    if name == 'fork_exec':
        if platform == 'win32':
            raise ValueError('the fork_exec backend needs os.fork()')
        from . import fork_exec as backend
        return backend
    if name == 'default':
        return get_backend.default
    raise ValueError(f'unknown backend: {name}')


get_backend.default = get_backend(os.environ.get('CRUSTA_BACKEND', 'subprocess'))


def change_default_backend(name_or_namespace):
    """change the backend used by Process(..., backend='default')

    name_or_namespace: 'subprocess', 'fork_exec' or anything with spawn() and
                       wait() functions that work like the ones in
                       crusta.subprocess
    """
    if isinstance(name_or_namespace, str):
        get_backend.default = get_backend(name_or_namespace)
    else:
        name_or_namespace.spawn
        name_or_namespace.wait
        get_backend.default = name_or_namespace
    return get_backend.default


class Timeout:
    """type of TIMEOUT, which Process.exit_code() returns if it gives up waiting"""
    def __repr__(self):
        return 'TIMEOUT'

    def __reduce__(self):
        return 'TIMEOUT'


TIMEOUT = Timeout()


class LaunchFailure(OSError):
    """the OS could not start the process

    errno and strerror come from the underlying error, filename is the
    program that was meant to run and command is what was asked for.
    """
    def __init__(self, command, args, error):
        super().__init__(error.errno, error.strerror, args[0])
        self.command = command


class Process:
    r"""a running (or finished) child process and its standard streams

    >>> p = Process('cat')
    >>> p.stdin.write(b'hello\nworld\n'); p.stdin.close()
    12
    >>> list(p.stdout_lines())
    ['hello', 'world']
    >>> p.exit_code()
    0

    The streams are binary file objects, captured when the process starts:
     - stdin is writable; the child sees EOF once it is closed
     - stdout and stderr are readable; stderr is None with redirect_stderr

    stdout_lines() and stderr_lines() wrap them in lazy line sequences.

    >>> p = Process('sh -c "echo out; echo err >&2"', redirect_stderr=True)
    >>> list(p.stdout_lines()), p.stderr
    (['out', 'err'], None)

    Waiting can be bounded, in which case TIMEOUT comes back if the process
    is still running. It is left alone, so it can be waited on again:

    >>> p = Process('sleep 10')
    >>> p.exit_code(timeout=0.01)
    TIMEOUT
    >>> p.kill(); p.exit_code()
    -15
    """
    def __init__(
        self,
        command,
        *,
        environment=None, clear_environment=False, directory=None,
        redirect_stderr=False, wrap_shell=False, backend='default',
    ):
        """start the process
        command: a string or sequence, see crusta.command.prepare_command()
        environment: mapping of variables merged into the environment
        clear_environment: if True, start from an empty environment instead
                           of a copy of os.environ, so that the child only
                           sees what is in environment
        directory: working directory of the child; inherited if None
        redirect_stderr: merge stderr into stdout; self.stderr is then None
        wrap_shell: False, True or a shell command line like 'bash', see
                    crusta.command.prepare_command()
        backend: 'default', 'subprocess' or 'fork_exec', or a namespace with
                 spawn() and wait() functions

        Raises LaunchFailure if the program cannot be started.
        """
        self.argv = command
        self.args = prepare_command(command, wrap_shell)

        self.backend = get_backend(backend) if isinstance(backend, str) else backend

        env = {} if clear_environment else dict(os.environ)
        if environment:
            env.update((str(k), str(v)) for k, v in environment.items())
        cwd = None if directory is None else os.fspath(directory)

        pipes = InputPipe(), OutputPipe(), None if redirect_stderr else OutputPipe()
        remote = pipes[0], pipes[1], pipes[1] if redirect_stderr else pipes[2]
        try:
            self.pid = self.backend.spawn(self.args, env, cwd, remote)
        except BaseException as e:
            for pipe in pipes:
                if pipe is not None:
                    pipe.close()
            if not isinstance(e, OSError):
                raise
            logger.warning('failed to launch %r: %s', self.args, e)
            raise LaunchFailure(command, self.args, e) from e
        for pipe in pipes:
            if pipe is not None:
                pipe.close_local()
        logger.debug('launched %r as pid %d', self.args, self.pid)

        self.stdin, self.stdout, self.stderr = (
            None if pipe is None else pipe.open()
            for pipe in pipes
        )
        self.waiter = None
        self.lock = threading.Lock()

    @property
    def streams(self):
        return self.stdin, self.stdout, self.stderr

    def stdout_lines(self, encoding='utf-8', errors='strict'):
        """lazy sequence of lines of text in stdout"""
        return line_sequence(self.stdout, encoding, errors)

    def stderr_lines(self, encoding='utf-8', errors='strict'):
        """lazy sequence of lines of text in stderr, or None with redirect_stderr"""
        return line_sequence(self.stderr, encoding, errors)

    def reap(self):
        status = self.backend.wait(self.pid)
        logger.debug('pid %d exited with status %d', self.pid, status)
        return status

    def exit_code(self, timeout=None):
        """wait for the process to exit and return its exit code

        timeout: give up after this many seconds and return TIMEOUT; the
                 process keeps running

        The process is reaped by a single waiter thread, started on the first
        call, so calling this again after the process exited returns the same
        exit code straight away.

        >>> p = Process('sh -c "exit 3"')
        >>> p.exit_code(), p.exit_code(timeout=0)
        (3, 3)
        """
        with self.lock:
            if self.waiter is None:
                self.waiter = Thread(self.reap, name=f'wait-{self.pid}').start()
        status = self.waiter.join(timeout)
        if self.waiter.is_alive():
            return TIMEOUT
        return status

    def poll(self):
        """same as exit_code(timeout=0)"""
        return self.exit_code(timeout=0)

    def kill(self, sig: Signals | int | str = SIGTERM, dead_okay: bool | None = None):
        r"""convenience for os.kill(self.pid, signal)

        sig can be an integer or the signal name, case insensitive, with or
        without the 'SIG' prefix

        dead_okay=False raises ProcessLookupError if the process is dead; by
        default dead_okay=True for SIGTERM and SIGKILL and False otherwise

        NOTE: this follows POSIX kill semantics, not those of `subprocess`; the
        default behavior is to send SIGTERM, not SIGKILL.

        >>> p = Process('sleep 10'); p.kill(9); p.exit_code()
        -9
        >>> p = Process('sleep 10'); p.kill('kill'); p.exit_code()
        -9
        >>> p = Process('true'); p.exit_code()
        0
        >>> try: p.kill(dead_okay=False)
        ... except ProcessLookupError: 'no good'
        ...
        'no good'
        """
        sig = get_signal(sig)
        if dead_okay is None:
            dead_okay = sig == SIGTERM or sig == SIGKILL
        if self.waiter is not None and not self.waiter.is_alive():
            if dead_okay:
                return
            raise ProcessLookupError(f'process {self.pid} has exited')
        try:
            os.kill(self.pid, sig)
        except ProcessLookupError:
            if not dead_okay:
                raise
        else:
            logger.debug('sent %s to pid %d', sig.name, self.pid)

    def close(self):
        """close the local ends of all three streams"""
        for stream in self.streams:
            if stream is not None:
                stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()
        self.exit_code()

    def __repr__(self):
        return f'{type(self).__name__}(args={repr(self.args)}, pid={self.pid})'


class ResultBase:
    def __iter__(self):
        return iter(vars(self).values())

    def __repr__(self):
        param_str = ', '.join(
            f'{n}={repr(a)}'
            for n, a in vars(self).items()
            if a is not None
        )
        return f'{type(self).__name__}({param_str})'

    def __str__(self):
        return repr(self)


class AbnormalTermination(ResultBase, Exception):
    """a process run through crusta.run() exited with a non-zero status

    Carries everything needed to report the failure without running the
    process again: the command as given, the Process, its exit code and its
    complete stdout and stderr (lines joined with '\\n').
    """
    def __init__(self, command, process, exit_code, stdout='', stderr=''):
        super().__init__(command, exit_code)
        self.command = command
        self.process = process
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
