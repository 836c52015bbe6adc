r"""lazy line-by-line reading of byte streams

>>> from io import BytesIO
>>> lines = line_sequence(BytesIO(b'one\ntwo\r\nthree'))
>>> next(lines)
'one'
>>> list(lines)
['two', 'three']
>>> lines.closed
True
"""

__all__ = 'LineSequence', 'line_sequence'


class LineSequence:
    """forward-only iterator over the lines of text in a byte stream

    Every next() does exactly one readline() on the stream, blocking until a
    line is available, decodes it and drops the line terminator. On
    end-of-stream the stream is closed and the sequence stays exhausted.

    Nothing is read ahead, so whatever the sequence has not consumed is still
    in the stream for another reader:

    >>> from io import BytesIO
    >>> stream = BytesIO(b'a\\nb\\nc\\n')
    >>> next(LineSequence(stream))
    'a'
    >>> list(LineSequence(stream))
    ['b', 'c']

    A sequence that is abandoned early leaves its stream open; close() it or
    use it as a context manager:

    >>> stream = BytesIO(b'a\\nb\\n')
    >>> with LineSequence(stream) as lines: next(lines)
    ...
    'a'
    >>> stream.closed
    True

    Errors reading or decoding the stream are raised by next(); lines that
    were already produced are not affected.
    """
    def __init__(self, stream, encoding='utf-8', errors='strict'):
        self.stream = stream
        self.encoding = encoding
        self.errors = errors

    def __iter__(self):
        return self

    def __next__(self):
        if self.closed:
            raise StopIteration
        line = self.stream.readline()
        if not line:
            self.close()
            raise StopIteration
        if line.endswith(b'\r\n'):
            line = line[:-2]
        elif line.endswith(b'\n'):
            line = line[:-1]
        return line.decode(self.encoding, self.errors)

    @property
    def closed(self):
        return self.stream.closed

    def close(self):
        """close the underlying stream"""
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def __repr__(self):
        state = 'closed' if self.closed else 'open'
        return f'<{type(self).__name__} {state}>'


def line_sequence(stream, encoding='utf-8', errors='strict'):
    """wrap a byte stream in a LineSequence; None stays None"""
    if stream is None:
        return None
    return LineSequence(stream, encoding, errors)
