"""OS pipes for the standard streams of a child process

Each pipe has a remote end, which is handed to the child, and a local end,
which the parent keeps as a file object. Once the child has been spawned,
the parent has no business with the remote end and closes it with
close_local(); otherwise the child never sees EOF on its stdin, and the parent
never sees EOF on the child's stdout.
"""

__all__ = 'Pipe', 'InputPipe', 'OutputPipe'

import os
from .fd import FD


class Pipe:
    """wrapper around os.pipe

    >>> p = Pipe()
    >>> with p.write_fd.open() as file: file.write(b'hello')
    ...
    5
    >>> with p.read_fd.open() as file: file.read()
    ...
    b'hello'
    """
    def __init__(self):
        self.fds = tuple(
            FD(fd, f'{rw}b')
            for fd, rw in zip(os.pipe(), 'rw')
        )

    @property
    def read_fd(self):
        return self.fds[0]

    @property
    def write_fd(self):
        return self.fds[1]

    def close(self, invalid_ok=True):
        for fd in self.fds:
            fd.close(invalid_ok)

    def fileno(self):
        """the remote end, for use by the child"""
        return int(self.remote_fd)

    def close_local(self):
        """close the remote end in this process"""
        self.remote_fd.close()

    def open(self):
        """open the local end as a file object"""
        return self.local_fd.open()

    def __repr__(self):
        return f'{type(self).__name__}()<{self.read_fd}, {self.write_fd}>'


class InputPipe(Pipe):
    """Pipe feeding the stdin of a child: the child reads, the parent writes"""
    @property
    def remote_fd(self):
        return self.read_fd

    @property
    def local_fd(self):
        return self.write_fd


class OutputPipe(Pipe):
    """Pipe collecting the stdout or stderr of a child: the child writes, the parent reads"""
    @property
    def remote_fd(self):
        return self.write_fd

    @property
    def local_fd(self):
        return self.read_fd
