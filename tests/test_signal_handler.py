import signal
import unittest
from threading import Thread
from unittest.mock import patch

from tests.mock_exit_handler import MockExitHandler
from tests.utils import DEFAULT_TIMEOUT_SECONDS
from k8s_monitor.constants import FORCED_EXIT_CODE_BASE
from k8s_monitor.context import Context, Cancelled
from k8s_monitor.signal_handler import CancellingSignalHandler


class TestCancellingSignalHandler(unittest.TestCase):

    def test_first_signal_cancels(self):
        ctx = Context()
        exit_handler = MockExitHandler()
        handler = CancellingSignalHandler(ctx, exit_handler)

        handler.handle(signal.SIGTERM, None)

        self.assertTrue(ctx.is_cancelled())
        self.assertIsInstance(ctx.err(), Cancelled)
        self.assertIn(str(int(signal.SIGTERM)), str(ctx.err()))
        self.assertIsNone(exit_handler.last_code)

    def test_second_signal_exits(self):
        ctx = Context()
        exit_handler = MockExitHandler()
        handler = CancellingSignalHandler(ctx, exit_handler)

        handler.handle(signal.SIGINT, None)
        handler.handle(signal.SIGINT, None)

        self.assertEqual(FORCED_EXIT_CODE_BASE + signal.SIGINT, exit_handler.last_code)

    def test_install(self):
        handler = CancellingSignalHandler(Context(), MockExitHandler())
        with patch('k8s_monitor.signal_handler.signal.signal') as mock_signal:
            handler.install()

        installed = [c[0][0] for c in mock_signal.call_args_list]
        self.assertEqual([signal.SIGINT, signal.SIGTERM], installed)
        for c in mock_signal.call_args_list:
            self.assertEqual(handler.handle, c[0][1])

    def test_signals_while_context_lock_held(self):
        # Signal handlers run on the main thread, possibly while it is inside the context's locked sections
        ctx = Context()
        exit_handler = MockExitHandler()
        handler = CancellingSignalHandler(ctx, exit_handler)

        def interrupted_section():
            with ctx._Context__lock:
                handler.handle(signal.SIGINT, None)
                handler.handle(signal.SIGINT, None)

        thread = Thread(target=interrupted_section)
        thread.daemon = True
        thread.start()
        thread.join(DEFAULT_TIMEOUT_SECONDS)

        self.assertFalse(thread.is_alive())
        self.assertTrue(ctx.is_cancelled())
        self.assertEqual(FORCED_EXIT_CODE_BASE + signal.SIGINT, exit_handler.last_code)
