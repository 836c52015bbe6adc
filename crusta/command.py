"""turning commands into argument vectors

A command is either a string, which gets split on whitespace:

>>> prepare_command('echo "a b" c')
['echo', 'a b', 'c']

or a sequence of strings and nested sequences. Strings are split the same way
and spliced in, while nested sequences are joined with a space and kept whole:

>>> prepare_command(['ls', '-l', ['My', 'Documents']])
['ls', '-l', 'My Documents']

This is not a shell. There is no globbing, redirection or variable expansion.
For that, the command can be handed to an actual shell:

>>> prepare_command('echo $HOME | tr a-z A-Z', wrap_shell=True)
['sh', '-c', 'echo $HOME | tr a-z A-Z']
"""

__all__ = 'split', 'prepare_command'

import os

QUOTE_CHARS = '"\''


def split(string, quote_chars=QUOTE_CHARS):
    """split a string on runs of whitespace, honoring quotes

    The quote that opens a span also closes it, and it is removed from the
    resulting token. Other quote characters inside the span are kept:

    >>> split('''say "it's" 'a "b"' ''')
    ['say', "it's", 'a "b"']

    Quoted and unquoted text next to each other end up in the same token:

    >>> split('--name="John Smith"')
    ['--name=John Smith']

    Empty tokens are dropped:

    >>> split('printf "" x')
    ['printf', 'x']
    """
    tokens = []
    token = []
    quote = None
    for char in string:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                token.append(char)
        elif char in quote_chars:
            quote = char
        elif char.isspace():
            if token:
                tokens.append(''.join(token))
                token = []
        else:
            token.append(char)
    if quote is not None:
        raise ValueError(f'no closing quotation ({quote}) in {repr(string)}')
    if token:
        tokens.append(''.join(token))
    return tokens


def get_shell(wrap_shell):
    if wrap_shell is True:
        return ['sh', '-c']
    shell = split(wrap_shell)
    if len(shell) == 1:
        shell.append('-c')
    return shell


def iter_tokens(command):
    if isinstance(command, str):
        yield from split(command)
        return
    for segment in command:
        if isinstance(segment, str):
            yield from split(segment)
        elif isinstance(segment, (list, tuple)):
            token = ' '.join(segment)
            if token:
                yield token
        elif isinstance(segment, os.PathLike):
            yield os.fspath(segment)
        else:
            raise TypeError(f'cannot use {repr(segment)} of type {type(segment).__name__} in a command')


def prepare_command(command, wrap_shell=False):
    """resolve a command into a list of arguments for the OS

    command:    a string, or a sequence of strings, path-likes and nested
                sequences of strings
    wrap_shell: if False-like, run the arguments directly
                if exactly True, run ['sh', '-c', command]
                if a str, split it and append '-c' if there's only one token

    With a shell, a string command is passed on verbatim, so its quoting is
    left to the shell. A sequence is resolved first and joined with spaces:

    >>> prepare_command(['echo', ['a', 'b']], wrap_shell='bash')
    ['bash', '-c', 'echo a b']

    NOTE: wrapping in a shell gives up every protection the tokenizer offers;
    whatever ends up in the string is interpreted by the shell.

    >>> prepare_command('   ')
    Traceback (most recent call last):
    ...
    ValueError: empty command: '   '
    """
    tokens = list(iter_tokens(command))
    if not tokens:
        raise ValueError(f'empty command: {repr(command)}')
    if wrap_shell:
        script = command if isinstance(command, str) else ' '.join(tokens)
        return get_shell(wrap_shell) + [script]
    return tokens
