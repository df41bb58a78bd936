from setuptools import setup

# because we have namespace packages without __init__.py
# which are not detected automatically by find_packages()
# we need to explicitly specify the packages
packages = [
    "nanspec.version._core_version",
    "nanspec.codetools",
    "nanspec.utilities",
    "nanspec.signals.nanfft",
    "nanspec.signals.multitaper",
]


import re

VERSIONFILE = "nanspec/version/_core_version/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in %s." % (VERSIONFILE,))

setup(
    name="nanspec",
    version=verstr,
    packages=packages,
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.17",
        "scipy>=1.7",
        "numba",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    description="NaN tolerant spectral estimation",
    license="GPL3",
    zip_safe=False,
    include_package_data=True,
)
