import os
import time

from k8s_monitor.exit_handler import ExitHandler


class RealExitHandler(ExitHandler):

    def exit(self, code):
        # Sleep briefly so log messages get flushed.
        time.sleep(0.1)
        os._exit(code)
