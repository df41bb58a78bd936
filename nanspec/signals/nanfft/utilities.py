"""
Utilities
=========
"""
import enum
import logging

import numba
import numpy as np
import scipy.linalg

__all__ = [
    "NanDataType",
    "UnsupportedMissingnessPattern",
    "classify_missing",
    "check_datatype",
    "basis_functions",
    "check_basis",
    "estimate_coefficients",
    "coefficients_to_spectrum",
    "halfspectrum",
    "fft_frequencies",
    "sampling_frequency",
    "nanfftoptions",
]

logger = logging.getLogger(__name__)


class NanDataType(enum.IntEnum):
    """Distribution of missing samples in a channel x sample array."""

    NoMissing = 0
    UniformMissing = 1
    ChannelVaryingMissing = 2


class UnsupportedMissingnessPattern(ValueError):
    """Raised for a data type that is not one of the NanDataType values."""


def classify_missing(dat):
    """Classify the distribution of NaNs in the data.

    Parameters
    ----------
    dat : 2d array
        data array with channels along the first axis and samples along
        the second axis

    Returns
    -------
    NanDataType

    Examples
    --------
    >>> classify_missing(np.zeros((2, 4))).name
    'NoMissing'
    >>> classify_missing([[0.0, np.nan], [1.0, np.nan]]).name
    'UniformMissing'
    >>> classify_missing([[0.0, np.nan], [np.nan, 1.0]]).name
    'ChannelVaryingMissing'

    """
    dat = np.atleast_2d(np.asarray(dat, dtype=np.float64))
    nchan = dat.shape[0]

    nancount = np.sum(np.isnan(dat), axis=0)

    if np.all(nancount == 0):
        return NanDataType.NoMissing
    elif np.all((nancount == 0) | (nancount == nchan)):
        return NanDataType.UniformMissing
    else:
        return NanDataType.ChannelVaryingMissing


def check_datatype(datatype):
    """Validate a data type override.

    Parameters
    ----------
    datatype : NanDataType, int or str
        Data type given as enum member, integer value or member name.

    Returns
    -------
    NanDataType

    """
    if isinstance(datatype, NanDataType):
        return datatype

    if isinstance(datatype, str):
        try:
            return NanDataType[datatype]
        except KeyError:
            raise UnsupportedMissingnessPattern(
                "Unsupported configuration of NaNs in the data: {!r}".format(datatype)
            ) from None

    try:
        return NanDataType(datatype)
    except (ValueError, TypeError):
        raise UnsupportedMissingnessPattern(
            "Unsupported configuration of NaNs in the data: {!r}".format(datatype)
        ) from None


def _number_of_harmonics(nsample):
    return nsample // 2 + 1


# the basis rows are filled one harmonic at a time; numba compiles the loop
@numba.jit(nopython=True, nogil=True)
def _harmonic_basis(nsample, k):
    t = np.linspace(0.0, 2.0 * np.pi, nsample + 1)[:-1]

    basis_c = np.zeros((k, nsample))
    basis_s = np.zeros((k, nsample))

    for w in range(k):
        if w == 0 or (w == k - 1 and nsample % 2 == 0):
            # DC and Nyquist components
            scale = 1.0 / nsample
        else:
            scale = 2.0 / nsample
        basis_c[w, :] = np.cos(w * t) * scale
        basis_s[w, :] = np.sin(w * t) * scale

    return basis_c, basis_s


def basis_functions(nsample):
    """Construct cosine and sine basis functions.

    The basis functions are sampled at `nsample` points over a single
    period and normalized such that the regression coefficients equal
    the real and (negative) imaginary parts of the discrete Fourier
    transform.

    Parameters
    ----------
    nsample : int
        Number of samples.

    Returns
    -------
    basis : (nsample, nsample) array
        Cosine basis functions for harmonics 0 to nsample//2, followed by
        the sine basis functions that are not identically zero. The
        array is read-only.

    """
    nsample = int(nsample)
    if nsample < 1:
        raise ValueError("Number of samples should be at least 1.")

    k = _number_of_harmonics(nsample)
    basis_c, basis_s = _harmonic_basis(nsample, k)

    # leave out the sine functions that are all zero
    if nsample % 2 == 0:
        basis = np.concatenate([basis_c, basis_s[1:-1]], axis=0)
    else:
        basis = np.concatenate([basis_c, basis_s[1:]], axis=0)

    basis.flags.writeable = False

    return basis


def check_basis(basis, nsample):
    """Validate precomputed basis functions.

    Parameters
    ----------
    basis : 2d array
    nsample : int
        Number of samples in the data.

    Returns
    -------
    basis : 2d array

    """
    basis = np.asarray(basis, dtype=np.float64)

    if basis.ndim != 2:
        raise ValueError("Basis functions should be a 2d array.")

    if basis.shape != (nsample, nsample):
        raise ValueError(
            "Basis functions have shape {shape}, expecting ({n}, {n}).".format(
                shape=basis.shape, n=nsample
            )
        )

    if not np.all(np.isfinite(basis)):
        raise ValueError("Basis functions contain non-finite values.")

    return basis


def estimate_coefficients(dat, basis):
    """Least-squares estimate of basis function coefficients.

    Solves ``dat = y @ basis`` with the minimum norm solution. Singular
    values smaller than ``max(M, N) * eps`` times the largest singular
    value of `basis` are treated as zero.

    Parameters
    ----------
    dat : (channels, samples) array
    basis : (functions, samples) array

    Returns
    -------
    y : (channels, functions) array

    """
    rtol = max(basis.shape) * np.finfo(basis.dtype).eps
    return np.asarray(dat) @ scipy.linalg.pinv(basis, atol=0.0, rtol=rtol)


def coefficients_to_spectrum(y, nsample):
    """Combine basis function coefficients into a complex spectrum.

    Parameters
    ----------
    y : (channels, nsample) array
        Coefficients of the cosine and sine basis functions, in the order
        returned by `basis_functions`.
    nsample : int
        Number of samples.

    Returns
    -------
    spectrum : (channels, nsample) complex array
        Spectrum with the same layout as ``numpy.fft.fft``.

    """
    y = np.atleast_2d(y)
    nsample = int(nsample)
    nchan = y.shape[0]
    k = _number_of_harmonics(nsample)

    if y.shape[1] != nsample:
        raise ValueError("Expecting {} coefficients per channel.".format(nsample))

    zero = np.zeros((nchan, 1))

    if nsample % 2 == 0:
        dc = y[:, :1]
        cosines = y[:, 1 : k - 1]
        nyquist = y[:, k - 1 : k]
        sines = y[:, k:nsample]

        y_real = np.concatenate([dc, cosines, nyquist, cosines[:, ::-1]], axis=1)
        y_imag = np.concatenate([zero, -sines, zero, sines[:, ::-1]], axis=1)
    else:
        dc = y[:, :1]
        cosines = y[:, 1:k]
        sines = y[:, k:nsample]

        y_real = np.concatenate([dc, cosines, cosines[:, ::-1]], axis=1)
        y_imag = np.concatenate([zero, -sines, sines[:, ::-1]], axis=1)

    return y_real + 1j * y_imag


def halfspectrum(spectrum):
    """Select the non-redundant bins of a full-length spectrum.

    Parameters
    ----------
    spectrum : array
        Spectrum with frequencies along the last axis.

    Returns
    -------
    array
        Bins 0 to N//2 along the last axis.

    """
    spectrum = np.asarray(spectrum)
    return spectrum[..., : _number_of_harmonics(spectrum.shape[-1])]


def sampling_frequency(time):
    """Sampling frequency from the first two samples of a time vector."""
    time = np.asarray(time, dtype=np.float64).ravel()

    if len(time) < 2:
        raise ValueError("Time vector should contain at least two samples.")

    dt = time[1] - time[0]
    if not dt > 0.0:
        raise ValueError("Time vector should be strictly increasing.")

    return 1.0 / dt


def fft_frequencies(nsample, time):
    """Frequencies of the bins in a full-length spectrum.

    Parameters
    ----------
    nsample : int
        Number of samples.
    time : 1d array
        Time vector of the data.

    Returns
    -------
    f : 1d array

    """
    return sampling_frequency(time) * np.arange(int(nsample)) / int(nsample)


class nanfftoptions(object):
    """Class to manage options for the NaN tolerant FFT.

    Parameters
    ----------
    basis : 2d array, optional
        Precomputed basis functions (see `basis_functions`).
    datatype : NanDataType, int or str, optional
        Distribution of NaNs in the data. If not given, it is determined
        from the data.

    """

    def __init__(self, basis=None, datatype=None):
        self.basis = basis
        self.datatype = datatype

    def keys(self):
        return ["basis", "datatype"]

    def __getitem__(self, key):
        if key in list(self.keys()):
            return object.__getattribute__(self, key)
        else:
            raise KeyError("Unknown key")

    @property
    def basis(self):
        """Precomputed basis functions."""
        return self._basis

    @basis.setter
    def basis(self, val):
        if not val is None:
            val = np.asarray(val, dtype=np.float64)
            if val.ndim != 2 or val.shape[0] != val.shape[1]:
                raise ValueError("Basis functions should be a square 2d array.")
        self._basis = val

    @property
    def datatype(self):
        """Distribution of NaNs in the data."""
        return self._datatype

    @datatype.setter
    def datatype(self, val):
        if not val is None:
            val = check_datatype(val)
        self._datatype = val

    def validate(self, dat):
        """Validate options for a data array.

        Parameters
        ----------
        dat : 2d array
            data array with channels along the first axis and samples
            along the second axis

        Returns
        -------
        dict
            Validated options with the resolved data type and the basis
            functions (None if no basis functions are needed).

        """
        dat = np.asarray(dat)
        if dat.ndim != 2:
            raise ValueError("Data should be a 2d array.")

        nchan, nsample = dat.shape
        if nsample < 1:
            raise ValueError("Number of samples should be at least 1.")

        if self._datatype is None:
            datatype = classify_missing(dat)
        else:
            datatype = self._datatype

        basis = None
        if datatype != NanDataType.NoMissing:
            if self._basis is None:
                logger.debug("Building basis functions for %d samples", nsample)
                basis = basis_functions(nsample)
            else:
                basis = check_basis(self._basis, nsample)

        return dict(nchannels=nchan, nsamples=nsample, datatype=datatype, basis=basis)
