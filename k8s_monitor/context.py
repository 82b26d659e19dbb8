import time
from threading import Event, RLock
from typing import Optional


class Cancelled(Exception):

    def __init__(self, message="context cancelled"):
        super().__init__(message)


class DeadlineExceeded(Cancelled):

    def __init__(self, message="context deadline exceeded"):
        super().__init__(message)


class Context:
    """
    A cooperative cancellation signal.

    A context is cancelled once, with a cause.  Cancelling is safe from a signal handler that interrupts the thread
    using the context, so the lock is reentrant.  Derived contexts are cancelled along with their parent and may
    additionally carry a deadline, after which they cancel themselves with DeadlineExceeded.  Cancelling a derived
    context never affects its parent.
    """

    def __init__(self, parent: Optional['Context'] = None, timeout_sec: Optional[float] = None):
        self.__lock = RLock()
        self.__event = Event()
        self.__cause = None
        self.__children = set()
        self.__parent = parent

        self.__deadline = None
        if timeout_sec is not None:
            self.__deadline = time.monotonic() + timeout_sec

        if parent is not None:
            parent.__attach(self)

    def with_timeout(self, timeout_sec: Optional[float]) -> 'Context':
        return Context(parent=self, timeout_sec=timeout_sec)

    def cancel(self, cause: Optional[Exception] = None):
        with self.__lock:
            if self.__cause is not None:
                return
            self.__cause = Cancelled() if cause is None else cause
            children = list(self.__children)
            self.__children.clear()

        self.__event.set()
        for child in children:
            child.cancel(self.__cause)

    def is_cancelled(self) -> bool:
        self.__check_deadline()
        return self.__event.is_set()

    def err(self) -> Optional[Exception]:
        self.__check_deadline()
        with self.__lock:
            return self.__cause

    def remaining(self) -> Optional[float]:
        if self.__deadline is None:
            return None
        return max(0.0, self.__deadline - time.monotonic())

    def wait(self, timeout_sec: Optional[float] = None) -> bool:
        """Returns True if the context was cancelled before the timeout elapsed."""
        remaining = self.remaining()
        if remaining is not None and (timeout_sec is None or remaining <= timeout_sec):
            if not self.__event.wait(remaining):
                self.cancel(DeadlineExceeded())
            return True

        return self.__event.wait(timeout_sec)

    def __check_deadline(self):
        if self.__deadline is not None and not self.__event.is_set() and time.monotonic() >= self.__deadline:
            self.cancel(DeadlineExceeded())

    def __attach(self, child: 'Context'):
        # A signal handler may cancel this context from inside the locked section, so the cause is read after
        # the child is registered
        with self.__lock:
            self.__children.add(child)

        cause = self.__cause
        if cause is not None:
            child.cancel(cause)

    def __detach(self, child: 'Context'):
        with self.__lock:
            self.__children.discard(child)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
        if self.__parent is not None:
            self.__parent.__detach(self)
        return False
