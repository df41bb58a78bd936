import doctest
import time
import unittest

import numpy as np

import nanspec.codetools.profile
from nanspec.codetools.profile import ExecutionTimer
from nanspec.codetools.profile import TimerError
from nanspec.signals.nanfft import nanfft


class TestExecutionTimer(unittest.TestCase):
    def test_profile(self):
        timer = ExecutionTimer()
        timer.logger = lambda x: None
        timer.start()
        self.assertRaises(TimerError, lambda: timer.start())
        timer.timers = {"test": 0.0}
        timer.name = "test"
        time.sleep(0.01)
        elapsed_time = timer.stop()
        self.assertTrue(isinstance(elapsed_time, float), elapsed_time > 0)
        timer.start()
        time.sleep(0.01)
        elapsed_time_bis = timer.stop()

        self.assertEqual(timer.timers["test"], elapsed_time + elapsed_time_bis)

    def test_stop_without_start(self):
        timer = ExecutionTimer(logger=None)
        self.assertRaises(TimerError, timer.stop)

    def test_report(self):
        messages = []
        with ExecutionTimer(name="block", logger=messages.append):
            pass
        self.assertEqual(len(messages), 1)
        self.assertTrue(messages[0].startswith("block: Elapsed time:"))

    def test_nanfft_timing_is_logged(self):
        with self.assertLogs("nanspec.signals.nanfft.nanfft", level="DEBUG") as cm:
            nanfft(np.zeros((2, 8)), np.arange(8) / 8.0)
        self.assertTrue(any("nanfft: Elapsed time" in msg for msg in cm.output))


def load_tests(loader, tests, ignore):
    tests.addTests(doctest.DocTestSuite(nanspec.codetools.profile))
    return tests


if __name__ == "__main__":
    unittest.main()
