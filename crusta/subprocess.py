"""low-level module for spawning and waiting for processes with subprocess.Popen

It only contains two functions, spawn() and wait()


>>> from crusta.pipe import OutputPipe
>>> stdout = OutputPipe()
>>> pid = spawn(['echo', 'hello world'], streams=(None, stdout))
>>> stdout.close_local()
>>> wait(pid)
0
>>> with stdout.open() as file: print(file.read().decode(), end='')
...
hello world
"""

__all__ = 'spawn', 'wait'

from subprocess import Popen

# pid -> Popen, until wait() is called for the pid; a process that is never
# waited for keeps its entry
spawned = {}


def spawn(argv, env=None, cwd=None, streams=()):
    """spawn a process and return its pid

    streams: up to three file-likes or descriptors for stdin, stdout and
             stderr; None inherits the stream from this process
    """
    stdin, stdout, stderr = tuple(streams) + (None,) * (3 - len(streams))
    popen = Popen(argv, env=env, cwd=cwd, stdin=stdin, stdout=stdout, stderr=stderr)
    spawned[popen.pid] = popen
    return popen.pid


def wait(pid):
    if pid in spawned:
        return spawned.pop(pid).wait()
    from .fork_exec import wait
    return wait(pid)
