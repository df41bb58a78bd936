"""
============================================================================
Multi-taper Fourier transform (:mod:`nanspec.signals.multitaper.multitaper`)
============================================================================

.. currentmodule:: nanspec.signals.multitaper.multitaper

Fourier transform of multichannel data using one or more tapers. Data
with missing samples can be transformed with the NaN tolerant FFT.

"""
import logging

import numpy as np

from nanspec.signals.nanfft import nanfft
from nanspec.signals.nanfft import nanfftoptions
from nanspec.signals.nanfft import sampling_frequency

from .utilities import mtmfftoptions

__all__ = ["mtmfft"]

logger = logging.getLogger(__name__)


def _phase_correction(freqoi, start_time, fs):
    # phase shift such that for all frequencies angle(t=0) = 0
    missedsamples = round(start_time * fs)
    anglein = (missedsamples - 1) * ((2.0 * np.pi / fs) * freqoi)
    return np.exp(1j * np.angle(np.exp(1j * anglein)))


def _tapered_nanfft(tapered, time, nfft):
    ntaper, nchan, nsample = tapered.shape

    padded = np.zeros((ntaper, nchan, nfft))
    padded[:, :, :nsample] = tapered

    # NaNs are at the same location for all tapers
    options = nanfftoptions().validate(padded[0])

    spectrum = np.zeros(padded.shape, dtype=np.complex128)
    for k in range(ntaper):
        spectrum[k] = nanfft(
            padded[k], time, basis=options["basis"], datatype=options["datatype"]
        )

    return spectrum


def mtmfft(dat, time, **kwargs):
    """Compute multi-tapered Fourier transform.

    Parameters
    ----------
    dat : 1d or 2d array
        data array with channels along the first axis and samples along
        the second axis
    time : 1d array
        time in seconds for each sample
    taper : str, optional
        'dpss' (default), 'sine' or the name of a window (see
        scipy.signal.get_window)
    pad : float, optional
        Total length of data after zero padding in seconds
    freqoi : 'all' or 1d array, optional
        Frequencies of interest
    tapsmofrq : float, optional
        Amount of spectral smoothing through multi-tapering in Hz.
        Note: 4 Hz smoothing means plus-minus 4 Hz, i.e. a 8 Hz
        smoothing box.
    nan_tolerant : bool, optional
        Use the NaN tolerant FFT for data with missing samples

    Returns
    -------
    spectrum : 3d array
        Fourier coefficients with shape (tapers, channels, frequencies)
    ntaper : int
        Number of tapers
    freqoi : 1d array
        Frequencies in spectrum

    """
    dat = np.asarray(dat, dtype=np.float64)

    if dat.ndim == 1:
        dat = dat[None, :]
    elif dat.ndim != 2:
        raise ValueError("Data should be a vector or 2d array.")

    time = np.asarray(time, dtype=np.float64).ravel()
    fs = sampling_frequency(time)

    nchan, nsample = dat.shape

    options = mtmfftoptions(**kwargs)
    options = options.validate(nsample, fs)

    tapers = options["tapers"]
    ntaper = options["ntapers"]
    nfft = options["nfft"]
    fidx = options["fidx"]
    freqoi = options["frequencies"]

    tapered = dat[None, :, :] * tapers[:, None, :]

    if options["nan_tolerant"] and np.any(np.isnan(dat)):
        spectrum = _tapered_nanfft(tapered, time, nfft)
    else:
        spectrum = np.fft.fft(tapered, nfft, axis=-1)

    spectrum = spectrum[:, :, fidx]

    if time[0] != 0:
        spectrum = spectrum * _phase_correction(freqoi, time[0], fs)

    logger.info(
        "nfft: %d samples, taper length: %d samples, %d tapers", nfft, nsample, ntaper
    )

    return spectrum, ntaper, freqoi
