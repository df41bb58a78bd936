"""
=====================================================================
NaN tolerant Fourier transform (:mod:`nanspec.signals.nanfft.nanfft`)
=====================================================================

.. currentmodule:: nanspec.signals.nanfft.nanfft

Fourier transform of multichannel data in the presence of missing
samples (NaNs). Data without NaNs is transformed with the standard FFT.
If samples are missing, the Fourier coefficients are obtained by linear
regression of the remaining samples on a set of cosine and sine basis
functions. If the missing samples differ between channels, each channel
is estimated separately with a shared set of basis functions.

"""
import functools
import logging

import numpy as np

from nanspec.codetools.profile import ExecutionTimer

from .utilities import NanDataType
from .utilities import UnsupportedMissingnessPattern
from .utilities import coefficients_to_spectrum
from .utilities import estimate_coefficients
from .utilities import nanfftoptions
from .utilities import sampling_frequency

__all__ = ["nanfft"]

logger = logging.getLogger(__name__)


def _fft(dat):
    return np.fft.fft(dat, axis=1)


def _uniform_missing(dat, basis):
    nsample = dat.shape[1]

    # the missing samples are at the same location for all channels
    keep = ~np.isnan(dat[0])

    if not np.any(keep):
        # all data is NaN, no reason to try to estimate the basis functions
        logger.debug("All samples are NaN, skipping estimation")
        return np.full(dat.shape, np.nan, dtype=np.complex128)

    # linear estimation based on dat = y @ basis
    y = estimate_coefficients(dat[:, keep], basis[:, keep])

    return coefficients_to_spectrum(y, nsample)


def _single_channel(row, basis):
    row = row[None, :]

    if np.any(np.isnan(row)):
        return _uniform_missing(row, basis)[0]
    else:
        return _fft(row)[0]


def _channel_varying_missing(dat, basis, pool=None):
    # the basis functions are shared by all channels
    fcn = functools.partial(_single_channel, basis=basis)

    if pool is None:
        rows = [fcn(row) for row in dat]
    else:
        rows = pool.map(fcn, list(dat))

    y = np.zeros(dat.shape, dtype=np.complex128)
    for k, row in enumerate(rows):
        y[k] = row

    return y


def nanfft(dat, time, pool=None, **kwargs):
    """Compute the Fourier transform of data with missing samples.

    Parameters
    ----------
    dat : 1d or 2d array
        data array with channels along the first axis and samples along
        the second axis. Missing samples are marked by NaN.
    time : 1d array
        time in seconds for each sample. Only the first two values are
        used to determine the sampling frequency.
    pool : object, optional
        Object with a `map` method (e.g. multiprocessing.Pool) that is
        used to process channels in parallel if the missing samples differ
        between channels.
    basis : 2d array, optional
        Precomputed basis functions (see `basis_functions`).
    datatype : NanDataType, int or str, optional
        Distribution of NaNs in the data. If not given, it is determined
        from the data.

    Returns
    -------
    spectrum : 1d or 2d complex array
        Fourier coefficients with shape (channels, samples), laid out as
        the output of ``numpy.fft.fft``. For 1d input data, a 1d array is
        returned.

    """
    dat = np.asarray(dat, dtype=np.float64)

    vector = dat.ndim == 1
    if vector:
        dat = dat[None, :]
    elif dat.ndim != 2:
        raise ValueError("Data should be a vector or 2d array.")

    fs = sampling_frequency(time)

    options = nanfftoptions(**kwargs)
    options = options.validate(dat)

    datatype = options["datatype"]
    basis = options["basis"]

    logger.debug(
        "nanfft: %d channels, %d samples, fs = %g Hz, datatype = %s",
        options["nchannels"],
        options["nsamples"],
        fs,
        datatype.name,
    )

    with ExecutionTimer(name="nanfft", logger=logger.debug):
        if datatype == NanDataType.NoMissing:
            # no basis functions are needed, use the standard FFT
            y = _fft(dat)
        elif datatype == NanDataType.UniformMissing:
            y = _uniform_missing(dat, basis)
        elif datatype == NanDataType.ChannelVaryingMissing:
            y = _channel_varying_missing(dat, basis, pool=pool)
        else:
            raise UnsupportedMissingnessPattern(
                "Unsupported configuration of NaNs in the data."
            )

    if vector:
        y = y[0]

    return y
