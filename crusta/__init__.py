r"""crusta - managing the execution of external programs

A command is a string, which is split on whitespace with quotes honored, or a
list of strings and nested lists. execute() starts it and returns a Process
right away:

>>> p = execute('tr a-z A-Z')
>>> p.stdin.write(b'hello\nworld\n'); p.stdin.close()
12
>>> list(p.stdout_lines())
['HELLO', 'WORLD']
>>> p.exit_code()
0

The lines are read lazily, one per step, so they can be consumed while the
process is still running.

The environment and the working directory can be set:

>>> list(execute('sh -c "echo $GREETING"', environment={'GREETING': 'hi'}).stdout_lines())
['hi']
>>> list(execute('pwd', directory='/').stdout_lines())
['/']

Waiting for a process can be bounded. TIMEOUT comes back if it takes too long,
and the process is left running:

>>> p = execute('sleep 10')
>>> exit_code(p, timeout=0.01)
TIMEOUT
>>> kill(p); exit_code(p)
-15

run() collects stdout in the background and hands back a Future:

>>> run('echo hello').result()
'hello'

which fails with an AbnormalTermination if the exit status is non-zero:

>>> try: run('ls /nonexistent/path').result()
... except AbnormalTermination as e: e.exit_code != 0, bool(e.stderr)
...
(True, True)

Running processes can be chained, stdout into stdin:

>>> p = pipe(execute('printf "c\na\nb\n"'), execute('sort'), execute('grep -v c'))
>>> list(p.stdout_lines())
['a', 'b']

There is no shell involved unless asked for:

>>> run('echo abc | tr a-z A-Z').result()
'abc | tr a-z A-Z'
>>> run('echo abc | tr a-z A-Z', wrap_shell=True).result()
'ABC'
>>> run.sh('echo abc | tr a-z A-Z').result()
'ABC'
"""

from .command import split, prepare_command  # noqa: F401
from .lines import LineSequence, line_sequence  # noqa: F401
from .pipeline import Pipeline  # noqa: F401
from .process import *  # noqa: F401 F403
from .util import *  # noqa: F401 F403
