"""
Utilities
=========
"""
import logging
import math

import numpy as np
import scipy as sp
import scipy.signal

__all__ = ["mtmfftoptions", "compute_tapers", "sine_tapers"]

logger = logging.getLogger(__name__)


def sine_tapers(n, k):
    """Compute sine tapers.

    Parameters
    ----------
    n : int
        Number of samples
    k : int
        Number of tapers

    Returns
    -------
    tapers : (k, n) array
        Orthonormal sine tapers.

    """
    n, k = int(n), int(k)
    samples = np.arange(1, n + 1)
    orders = np.arange(1, k + 1)
    return np.sqrt(2.0 / (n + 1)) * np.sin(np.pi * orders[:, None] * samples[None, :] / (n + 1))


def _dpss_tapers(n, nw):
    kmax = min(int(round(2 * nw)), n)
    if kmax < 1:
        return np.zeros((0, n))
    if nw >= n / 2.0:
        raise ValueError(
            "Smoothing too large for data length. Time-halfbandwidth product = {nw}, maximum = {maxnw}.".format(
                nw=nw, maxnw=n / 2.0
            )
        )
    tapers = sp.signal.windows.dpss(int(n), float(nw), kmax)
    return np.atleast_2d(tapers)


def compute_tapers(taper, n, fs=1.0, tapsmofrq=None):
    """Compute tapers.

    Parameters
    ----------
    taper : str
        'dpss', 'sine' or the name of a window that is understood by
        scipy.signal.get_window
    n : int
        Number of samples in signal
    fs : float, optional
        Sampling frequency
    tapsmofrq : float, optional
        Amount of spectral smoothing in Hz (plus-minus). Required for
        'dpss' and 'sine' tapers.

    Returns
    -------
    tapers : (ntapers, n) array

    """
    n = int(n)
    fs = float(fs)

    if taper in ("dpss", "sine"):
        if tapsmofrq is None:
            raise ValueError("Tapsmofrq is required for {} tapers.".format(taper))

        nw = n * (tapsmofrq / fs)

        if taper == "dpss":
            tapers = _dpss_tapers(n, nw)
        else:
            tapers = sine_tapers(n, int(round(nw)))

        # remove the last taper
        tapers = tapers[:-1]

        if tapers.shape[0] == 0:
            raise ValueError(
                "Data length too short for specified smoothing. Data length: {dur:.3f} s, smoothing: {smo:.3f} Hz, minimum smoothing: {minsmo:.3f} Hz".format(
                    dur=n / fs, smo=tapsmofrq, minsmo=fs / n
                )
            )
        elif tapers.shape[0] == 1:
            logger.warning("Using only one taper for specified smoothing")

    elif taper == "alpha":
        raise NotImplementedError("Alpha tapers are not yet implemented.")

    else:
        # normalized window
        tapers = sp.signal.get_window(taper, n, fftbins=False)
        tapers = tapers / np.linalg.norm(tapers)
        tapers = tapers[None, :]

    return tapers


class mtmfftoptions(object):
    """Class to manage multitaper FFT options.

    Parameters
    ----------
    taper : str
        'dpss', 'sine' or window name
    pad : scalar or None
        Total length of data after zero padding in seconds
    freqoi : 'all' or 1d array
        Frequencies of interest
    tapsmofrq : scalar or None
        Amount of spectral smoothing (plus-minus) in Hz
    nan_tolerant : bool
        Use the NaN tolerant FFT for data with missing samples

    """

    def __init__(
        self, taper="dpss", pad=None, freqoi="all", tapsmofrq=None, nan_tolerant=False
    ):
        self.taper = taper
        self.pad = pad
        self.freqoi = freqoi
        self.tapsmofrq = tapsmofrq
        self.nan_tolerant = nan_tolerant

    def keys(self):
        return ["taper", "pad", "freqoi", "tapsmofrq", "nan_tolerant"]

    def __getitem__(self, key):
        if key in list(self.keys()):
            return object.__getattribute__(self, key)
        else:
            raise KeyError("Unknown key")

    def nfft(self, nsamples, fs=1.0):
        """Compute number of samples after padding.

        Parameters
        ----------
        nsamples : int
            Number of samples in signal
        fs : float, optional
            Sampling frequency

        Returns
        -------
        n : int
            padded number of samples

        """
        nsamples = int(nsamples)
        fs = float(fs)

        if self._pad is None:
            return nsamples

        nfft = int(round(self._pad * fs))
        if nfft < nsamples:
            raise ValueError("The padding that you specified is shorter than the data.")

        return nfft

    def frequencies(self, nsamples, fs=1.0):
        """Compute frequencies of interest.

        Parameters
        ----------
        nsamples : int
            Number of samples
        fs : scalar
            Sampling frequency

        Returns
        -------
        f : 1d array
            Frequencies of interest, rounded to the FFT bins
        fidx : 1d array
            Indices of the FFT bins

        """
        fs = float(fs)
        nfft = self.nfft(nsamples, fs)
        endtime = nfft / fs

        if self._freqoi is None:
            fidx = np.arange(int(round((fs / 2.0) / (fs / nfft))) + 1)
        else:
            fidx = np.round(self._freqoi / (fs / nfft)).astype(int)
            if np.any(fidx >= nfft):
                raise ValueError("Frequencies of interest exceed the sampling frequency.")

        f = fidx / endtime

        return f, fidx

    def validate(self, nsamples, fs=1.0):
        """Validate multitaper FFT options.

        Parameters
        ----------
        nsamples : int
            Number of samples
        fs : scalar
            Sampling frequency

        Returns
        -------
        dict
            Validated options and pre-computed tapers.

        """
        nsamples = int(nsamples)
        if nsamples < 1:
            raise ValueError("Number of samples should be at least 1.")

        fs = float(fs)
        if fs <= 0.0:
            raise ValueError("Sampling frequency should be larger than zero.")

        d = dict(
            sampling_frequency=fs,
            nsamples=nsamples,
            taper=self._taper,
            tapsmofrq=self._tapsmofrq,
            nan_tolerant=self._nan_tolerant,
            nfft=self.nfft(nsamples, fs),
        )

        d["frequencies"], d["fidx"] = self.frequencies(nsamples, fs)
        d["tapers"] = compute_tapers(self._taper, nsamples, fs, self._tapsmofrq)
        d["ntapers"] = d["tapers"].shape[0]

        return d

    @property
    def taper(self):
        """Type of taper."""
        return self._taper

    @taper.setter
    def taper(self, val):
        if not isinstance(val, str) or not val:
            raise ValueError("Taper should be a non-empty string.")
        self._taper = val

    @property
    def pad(self):
        """Total length of padded data in seconds."""
        return self._pad

    @pad.setter
    def pad(self, val):
        if not val is None:
            val = float(val)
            if val <= 0.0:
                raise ValueError("Pad should be larger than zero.")
        self._pad = val

    @property
    def freqoi(self):
        """Frequencies of interest (None means all)."""
        return self._freqoi

    @freqoi.setter
    def freqoi(self, val):
        if val is None or (isinstance(val, str) and val == "all"):
            val = None
        elif isinstance(val, str):
            raise ValueError("Freqoi should be 'all' or a sequence of frequencies.")
        else:
            val = np.array(val, dtype=np.float64).ravel()
            if len(val) == 0 or np.any(val < 0.0) or not np.all(np.isfinite(val)):
                raise ValueError("Freqoi should contain finite, non-negative frequencies.")
        self._freqoi = val

    @property
    def tapsmofrq(self):
        """Amount of spectral smoothing in Hz."""
        return self._tapsmofrq

    @tapsmofrq.setter
    def tapsmofrq(self, val):
        if not val is None:
            val = float(val)
            if val <= 0.0 or math.isinf(val):
                raise ValueError("Tapsmofrq should be larger than zero.")
        self._tapsmofrq = val

    @property
    def nan_tolerant(self):
        """Use NaN tolerant FFT."""
        return self._nan_tolerant

    @nan_tolerant.setter
    def nan_tolerant(self, val):
        self._nan_tolerant = bool(val)
