from doctest import testmod
from importlib import import_module
from sys import platform

from .process import change_default_backend, get_backend


def modules(*names):
    # crusta.pipe the module is shadowed by crusta.pipe the function
    return [import_module(f'crusta.{name}' if name else 'crusta') for name in names]


backends = ('subprocess',) if platform == 'win32' else ('subprocess', 'fork_exec')

print('checking backends...')
for name in backends:
    mod = get_backend(name)
    print(f'\t{mod.__name__}...')
    testmod(mod)
print()

for mod in modules('command', 'fd', 'pipe', 'thread', 'lines'):
    print(f'{mod.__name__}...')
    testmod(mod)
print()

for backend in backends:
    change_default_backend(backend)
    print(f'with backend {get_backend.default.__name__}...')
    for mod in modules('process', 'pipeline', 'util', ''):
        print(f'\t{mod.__name__}...')
        testmod(mod)
    print()
