__all__ = 'Thread',

import threading


class Thread(threading.Thread):
    """no-frills daemon thread with a return value

    >>> Thread(lambda: 1 + 2).start().join()
    3
    >>> with Thread(lambda: 1 + 2) as thread: thread.join()
    ...
    3

    An exception raised by the target is raised again by join(), every time
    it is called:

    >>> thread = Thread(lambda: 1 / 0).start()
    >>> thread.join()
    Traceback (most recent call last):
    ...
    ZeroDivisionError: division by zero

    If join() times out, it returns None and the thread is still alive.
    """
    def __init__(self, target, name=None):
        """initilialize the thread

        target: callable which takes no arguments
        name:   thread name; derived from target if not given
        """
        self.result = None
        self.error = None

        def closure():
            try:
                self.result = target()
            except Exception as e:
                self.error = e

        super().__init__(target=closure, name=name or Thread.get_name(target), daemon=True)

    def start(self):
        """start the thread"""
        super().start()
        return self

    def join(self, timeout=None):
        """join the thread"""
        super().join(timeout)
        if self.error is not None:
            raise self.error
        return self.result

    @staticmethod
    def get_name(func):
        """give a decent name to the thread"""
        if hasattr(func, 'func') and func.func is not func:
            return Thread.get_name(func.func)
        return getattr(func, '__qualname__', repr(func))

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.join()
