"""low-level module for spawning and waiting for processes with os.fork and os.exec

It only contains two functions, spawn() and wait()


>>> from crusta.pipe import OutputPipe
>>> stdout = OutputPipe()
>>> pid = spawn(['pwd'], cwd='/', streams=(None, stdout))
>>> stdout.close_local()
>>> wait(pid)
0
>>> with stdout.open() as file: print(file.read().decode(), end='')
...
/

Failing to launch is reported in the parent:

>>> spawn(['/nonexistent/program'])
Traceback (most recent call last):
...
FileNotFoundError: [Errno 2] No such file or directory
"""

__all__ = 'spawn', 'wait'

import os
import signal
from .pipe import Pipe


def spawn(argv, env=None, cwd=None, streams=()):
    """spawn a process and return its pid

    streams: up to three file-likes or descriptors for stdin, stdout and
             stderr; None inherits the stream from this process
    """
    launch_pipe = Pipe()

    pid = os.fork()
    if pid:
        launch_pipe.write_fd.close()
        with launch_pipe.read_fd.open() as file:
            error = file.read()
        if error:
            from ast import literal_eval
            import builtins
            wait(pid)
            name, argstr = error.decode().split('\n', maxsplit=1)
            error = getattr(builtins, name, RuntimeError)
            args = literal_eval(argstr)
            raise error(*args)
        return pid

    try:
        for name in 'SIGPIPE', 'SIGXFZ', 'SIGXFSZ':
            sig = getattr(signal, name, None)
            if sig is None:
                continue
            signal.signal(sig, signal.SIG_DFL)

        fds = [
            (i, stream if isinstance(stream, int) else stream.fileno())
            for i, stream in enumerate(streams)
            if stream is not None
        ]
        for i, fd in fds:
            os.dup2(fd, i)
        for fd in {fd for _, fd in fds} - {i for i, _ in fds}:
            os.close(fd)

        launch_pipe.read_fd.close()
        if cwd is not None:
            os.chdir(cwd)
        if env is None:
            os.execvp(argv[0], argv)
        else:
            os.execvpe(argv[0], argv, env)
        raise RuntimeError('failed to launch process')
    except BaseException as e:
        os.write(launch_pipe.write_fd.fileno(), '\n'.join((
            type(e).__name__,
            repr(e.args)
        )).encode())
    finally:
        os._exit(127)


def wait(pid):
    """wait on a pid to complete and return its exit status

    A process ended by a signal has the negated signal number as its status,
    the same as with subprocess.

    >>> wait(spawn(['sh', '-c', 'exit 3']))
    3
    >>> wait(spawn(['sh', '-c', 'kill $$']))
    -15
    """
    pid_, status = os.waitpid(pid, 0)
    if pid_ == pid:
        if os.WIFSIGNALED(status):
            returncode = -os.WTERMSIG(status)
        elif os.WIFEXITED(status):
            returncode = os.WEXITSTATUS(status)
        elif os.WIFSTOPPED(status):
            returncode = -os.WSTOPSIG(status)
        else:
            raise RuntimeError(f'weird exit status: {hex(status)}')
    else:
        raise RuntimeError(f'pid is {pid_}, expected {pid}')
    return returncode
