import signal

from k8s_monitor import log
from k8s_monitor.constants import FORCED_EXIT_CODE_BASE
from k8s_monitor.context import Context, Cancelled
from k8s_monitor.exit_handler import ExitHandler

DEFAULT_SIGNALS = [signal.SIGINT, signal.SIGTERM]


class CancellingSignalHandler:
    """
    The first termination signal cancels the monitor context so the loop can stop cleanly.  A second signal, e.g.
    while a metrics request is hanging, exits immediately.
    """

    def __init__(self, ctx: Context, exit_handler: ExitHandler):
        self.__ctx = ctx
        self.__exit_handler = exit_handler

    def install(self, signals=None):
        if signals is None:
            signals = DEFAULT_SIGNALS

        for s in signals:
            signal.signal(s, self.handle)

    def handle(self, signum, frame):
        if not self.__ctx.is_cancelled():
            log.info("Received signal: %s, stopping...", signum)
            self.__ctx.cancel(Cancelled("received signal: {}".format(signum)))
            return

        log.warning("Received signal: %s while stopping, exiting immediately", signum)
        self.__exit_handler.exit(FORCED_EXIT_CODE_BASE + signum)
