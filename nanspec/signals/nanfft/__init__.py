"""
==============================================================
NaN tolerant spectral analysis (:mod:`nanspec.signals.nanfft`)
==============================================================

.. currentmodule:: nanspec.signals.nanfft

Fourier transform of data with missing samples.


"""
from .nanfft import *
from .utilities import *

__all__ = [s for s in dir() if not s.startswith("_")]
