import sys

import pytest

BACKENDS = ['subprocess'] if sys.platform == 'win32' else ['subprocess', 'fork_exec']


@pytest.fixture(params=BACKENDS)
def backend(request):
    """name of each spawn backend in turn"""
    return request.param
