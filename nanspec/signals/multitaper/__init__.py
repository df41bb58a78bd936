"""
================================================================
Multitaper spectral analysis (:mod:`nanspec.signals.multitaper`)
================================================================

.. currentmodule:: nanspec.signals.multitaper

Multitaper Fourier transform.


"""
from .multitaper import *
from .utilities import *

__all__ = [s for s in dir() if not s.startswith("_")]
