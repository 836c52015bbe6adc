__all__ = 'Pipeline', 'pipe'

import logging
from signal import SIGTERM
from .thread import Thread

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1 << 16


def copy(src, dest):
    """copy src.stdout into dest.stdin until EOF, then close both

    Data is forwarded as soon as it is available, not in full chunks.
    """
    size = 0
    with src.stdout as output, dest.stdin as into:
        while chunk := output.read1(CHUNK_SIZE):
            size += into.write(chunk)
            into.flush()
    logger.debug('copied %d bytes from pid %d to pid %d', size, src.pid, dest.pid)
    return size


class Pipeline:
    """processes chained stdout-to-stdin by pipe()

    Only the ends are exposed: stdin of the first process and stdout of the
    last one. The streams in between are closed by the time a Pipeline exists.
    """
    def __init__(self, processes):
        self.processes = tuple(processes)

    @property
    def stdin(self):
        return self.processes[0].stdin

    @property
    def stdout(self):
        return self.processes[-1].stdout

    def stdout_lines(self, encoding='utf-8', errors='strict'):
        """lazy sequence of lines of text in stdout of the last process"""
        return self.processes[-1].stdout_lines(encoding, errors)

    def exit_codes(self, timeout=None):
        """exit codes (or TIMEOUT) of every process, in order"""
        return tuple(process.exit_code(timeout) for process in self.processes)

    def kill(self, sig=SIGTERM):
        """kill every process"""
        for process in self.processes:
            process.kill(sig)

    def __repr__(self):
        return f'{type(self).__name__}({repr(self.processes)})'


def pipe(*processes):
    r"""pipe the stdout of each process into the stdin of the next

    The processes must already be running (see crusta.process.Process). All
    the copying happens concurrently, one thread per pair, and this returns
    once all of it is done:

    >>> from crusta.process import Process
    >>> p = pipe(Process('printf "b\na\n"'), Process('sort'), Process('tr a-z A-Z'))
    >>> list(p.stdout_lines())
    ['A', 'B']
    >>> p.exit_codes()
    (0, 0, 0)

    If copying fails anywhere, every other copy is still allowed to finish
    (closing its streams) before the first error is raised.
    """
    if not processes:
        raise ValueError('pipe() needs at least one process')
    threads = [
        Thread(lambda src=src, dest=dest: copy(src, dest), name=f'pipe-{src.pid}-{dest.pid}').start()
        for src, dest in zip(processes, processes[1:])
    ]
    errors = []
    for thread in threads:
        try:
            thread.join()
        except Exception as e:
            errors.append(e)
    if errors:
        logger.warning('%d of %d pipe segments failed', len(errors), len(threads))
        raise errors[0]
    return Pipeline(processes)
