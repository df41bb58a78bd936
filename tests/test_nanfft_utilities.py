import doctest
import unittest

import numpy as np

import nanspec.signals.nanfft.utilities
from nanspec.signals.nanfft import NanDataType
from nanspec.signals.nanfft import UnsupportedMissingnessPattern
from nanspec.signals.nanfft import basis_functions
from nanspec.signals.nanfft import check_datatype
from nanspec.signals.nanfft import classify_missing
from nanspec.signals.nanfft import coefficients_to_spectrum
from nanspec.signals.nanfft import fft_frequencies
from nanspec.signals.nanfft import halfspectrum
from nanspec.signals.nanfft import nanfftoptions


class TestClassifyMissing(unittest.TestCase):
    def test_no_missing(self):
        dat = np.ones((3, 5))
        self.assertEqual(classify_missing(dat), NanDataType.NoMissing)

    def test_uniform_missing(self):
        dat = np.ones((3, 5))
        dat[:, [0, 3]] = np.nan
        self.assertEqual(classify_missing(dat), NanDataType.UniformMissing)

    def test_channel_varying_missing(self):
        dat = np.ones((3, 5))
        dat[:, 0] = np.nan
        dat[1, 2] = np.nan
        self.assertEqual(classify_missing(dat), NanDataType.ChannelVaryingMissing)

    def test_single_channel(self):
        self.assertEqual(classify_missing([1.0, np.nan, 2.0]), NanDataType.UniformMissing)

    def test_repeatable(self):
        dat = np.random.normal(size=(4, 20))
        dat[dat > 1.0] = np.nan
        self.assertEqual(classify_missing(dat), classify_missing(dat))


class TestCheckDatatype(unittest.TestCase):
    def test_valid(self):
        self.assertIs(check_datatype(1), NanDataType.UniformMissing)
        self.assertIs(check_datatype("NoMissing"), NanDataType.NoMissing)
        self.assertIs(
            check_datatype(NanDataType.ChannelVaryingMissing),
            NanDataType.ChannelVaryingMissing,
        )

    def test_invalid(self):
        for value in (-1, 3, 1.5, "nomissing", None):
            with self.assertRaises(UnsupportedMissingnessPattern):
                check_datatype(value)

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(UnsupportedMissingnessPattern, ValueError))


class TestBasisFunctions(unittest.TestCase):
    def test_shape(self):
        for n in (1, 2, 7, 8, 33):
            self.assertEqual(basis_functions(n).shape, (n, n))

    def test_normalization_even(self):
        basis = basis_functions(8)
        np.testing.assert_allclose(basis[0], 1.0 / 8)
        np.testing.assert_allclose(basis[4], np.array([1, -1] * 4) / 8.0, atol=1e-14)
        np.testing.assert_allclose(np.max(np.abs(basis[1])), 2.0 / 8)

    def test_normalization_odd(self):
        basis = basis_functions(7)
        np.testing.assert_allclose(basis[0], 1.0 / 7)
        # the highest harmonic of an odd number of samples is not a Nyquist component
        np.testing.assert_allclose(basis[3, 0], 2.0 / 7)

    def test_sine_rows(self):
        t = 2 * np.pi * np.arange(8) / 8
        basis = basis_functions(8)
        # cosines 0..4 followed by sines 1..3
        np.testing.assert_allclose(basis[5], np.sin(t) * 2 / 8, atol=1e-14)
        np.testing.assert_allclose(basis[7], np.sin(3 * t) * 2 / 8, atol=1e-14)

    def test_read_only(self):
        basis = basis_functions(8)
        self.assertFalse(basis.flags.writeable)

    def test_repeatable(self):
        np.testing.assert_array_equal(basis_functions(12), basis_functions(12))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            basis_functions(0)


class TestCoefficientsToSpectrum(unittest.TestCase):
    def test_inverse_of_fft(self):
        rng = np.random.default_rng(0)
        for n in (6, 7):
            dat = rng.normal(size=(2, n))
            coef = dat @ np.linalg.inv(basis_functions(n))
            np.testing.assert_allclose(
                coefficients_to_spectrum(coef, n), np.fft.fft(dat, axis=1), atol=1e-10
            )

    def test_layout_even(self):
        coef = np.arange(1, 7, dtype=float)[None, :]
        # DC, cos1, cos2, Nyquist, sin1, sin2
        spectrum = coefficients_to_spectrum(coef, 6)
        np.testing.assert_array_equal(spectrum.real, [[1, 2, 3, 4, 3, 2]])
        np.testing.assert_array_equal(spectrum.imag, [[0, -5, -6, 0, 6, 5]])

    def test_layout_odd(self):
        coef = np.arange(1, 6, dtype=float)[None, :]
        # DC, cos1, cos2, sin1, sin2
        spectrum = coefficients_to_spectrum(coef, 5)
        np.testing.assert_array_equal(spectrum.real, [[1, 2, 3, 3, 2]])
        np.testing.assert_array_equal(spectrum.imag, [[0, -4, -5, 5, 4]])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            coefficients_to_spectrum(np.zeros((2, 5)), 6)


class TestHelpers(unittest.TestCase):
    def test_halfspectrum(self):
        self.assertEqual(halfspectrum(np.zeros((2, 8))).shape, (2, 5))
        self.assertEqual(halfspectrum(np.zeros(7)).shape, (4,))

    def test_fft_frequencies(self):
        np.testing.assert_allclose(fft_frequencies(4, [0.0, 0.01]), [0, 25, 50, 75])


class TestNanFFTOptions(unittest.TestCase):
    def test_no_basis_needed(self):
        options = nanfftoptions().validate(np.zeros((2, 8)))
        self.assertEqual(options["datatype"], NanDataType.NoMissing)
        self.assertIsNone(options["basis"])
        self.assertEqual(options["nchannels"], 2)
        self.assertEqual(options["nsamples"], 8)

    def test_basis_built(self):
        dat = np.zeros((2, 8))
        dat[:, 1] = np.nan
        options = nanfftoptions().validate(dat)
        self.assertEqual(options["datatype"], NanDataType.UniformMissing)
        np.testing.assert_array_equal(options["basis"], basis_functions(8))

    def test_datatype_override(self):
        options = nanfftoptions(datatype="UniformMissing").validate(np.zeros((2, 8)))
        self.assertEqual(options["datatype"], NanDataType.UniformMissing)
        self.assertEqual(options["basis"].shape, (8, 8))

    def test_keys(self):
        options = nanfftoptions(datatype=0)
        self.assertEqual(options.keys(), ["basis", "datatype"])
        self.assertIs(options["datatype"], NanDataType.NoMissing)
        with self.assertRaises(KeyError):
            options["taper"]

    def test_invalid_basis(self):
        with self.assertRaises(ValueError):
            nanfftoptions(basis=np.zeros((3, 4)))


def load_tests(loader, tests, ignore):
    tests.addTests(doctest.DocTestSuite(nanspec.signals.nanfft.utilities))
    return tests


if __name__ == "__main__":
    unittest.main()
