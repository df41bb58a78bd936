"""
===================================================
Profiling tools (:mod:`nanspec.codetools.profile`)
===================================================

.. currentmodule:: nanspec.codetools.profile

Tools for profiling code.

.. autosummary::
    :toctree: generated/

    ExecutionTimer
    TimerError

"""
import logging
import timeit

from nanspec.version._core_version._version import __version__

__all__ = ["ExecutionTimer", "TimerError"]

logger = logging.getLogger(__name__)


class TimerError(Exception):
    """Raised when an ExecutionTimer is started or stopped out of order."""


class ExecutionTimer:
    """Timer for code execution.

    The timer can be used as a context manager or through explicit calls
    to `start` and `stop`. Named timers accumulate their elapsed time in
    the `timers` dictionary.

    Example usage:

    >>> with ExecutionTimer(logger=None) as t:
    ...     pass
    >>> t.interval >= 0.0
    True

    Parameters
    ----------
    name : str, optional
        Name of the timer. Elapsed times are accumulated under this name.
    text : str, optional
        Format string for the report that is passed to `logger`.
    logger : callable, optional
        Function that receives the report. Defaults to the debug method of
        the module logger. Set to None to disable reporting.
    timers : dict, optional
        Dictionary that holds the accumulated time of named timers.

    """

    def __init__(
        self,
        name=None,
        text="Elapsed time: {:0.4f} seconds",
        logger=logger.debug,
        timers=None,
    ):
        self.name = name
        self.text = text
        self.logger = logger
        self.timers = {} if timers is None else timers
        self.interval = None
        self._start_time = None

        if self.name is not None:
            self.timers.setdefault(self.name, 0.0)

    def start(self):
        """Start a new timer."""
        if self._start_time is not None:
            raise TimerError("Timer is running. Use .stop() to stop it")

        self._start_time = timeit.default_timer()

    def stop(self):
        """Stop the timer and report the elapsed time.

        Returns
        -------
        elapsed : float
            Elapsed time in seconds.

        """
        if self._start_time is None:
            raise TimerError("Timer is not running. Use .start() to start it")

        self.interval = timeit.default_timer() - self._start_time
        self._start_time = None

        if self.logger is not None:
            if self.name is None:
                self.logger(self.text.format(self.interval))
            else:
                self.logger("{}: {}".format(self.name, self.text.format(self.interval)))

        if self.name is not None:
            self.timers[self.name] = self.timers.get(self.name, 0.0) + self.interval

        return self.interval

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()
