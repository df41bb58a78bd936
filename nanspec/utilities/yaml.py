"""


.. currentmodule:: nanspec.utilities.yaml

This module will import the complete namespace of the PyYaml package and
add support for OrderedDicts. It also provides `load_options` to read
estimator options from a YAML document, e.g.::

    nanfft:
      datatype: UniformMissing
    mtmfft:
      taper: dpss
      tapsmofrq: 4.0
      pad: 2.0

"""
from collections import OrderedDict as _OrderedDict

from yaml import *

from nanspec.version._core_version._version import __version__

# note that we will use the default mapping tag,
# which means that all maps are loaded as OrderedDicts
_mapping_tag = resolver.BaseResolver.DEFAULT_MAPPING_TAG


def dict_representer(dumper, data):
    return dumper.represent_mapping(_mapping_tag, iter(data.items()))


def dict_constructor(loader, node):
    return _OrderedDict(loader.construct_pairs(node))


add_representer(_OrderedDict, dict_representer)
add_constructor(_mapping_tag, dict_constructor)
add_constructor(_mapping_tag, dict_constructor, Loader=SafeLoader)


def _option_classes():
    from nanspec.signals.multitaper import mtmfftoptions
    from nanspec.signals.nanfft import nanfftoptions

    return _OrderedDict([("nanfft", nanfftoptions), ("mtmfft", mtmfftoptions)])


def load_options(stream):
    """Load estimator options from YAML.

    Parameters
    ----------
    stream : str or file-like
        YAML document with optional 'nanfft' and 'mtmfft' sections.

    Returns
    -------
    OrderedDict
        Options objects for each section in the document.

    """
    doc = load(stream, Loader=SafeLoader)

    if doc is None:
        return _OrderedDict()

    if not isinstance(doc, dict):
        raise ValueError("Options document should be a mapping.")

    classes = _option_classes()
    options = _OrderedDict()

    for section, values in doc.items():
        if not section in classes:
            raise ValueError("Unknown options section: {}".format(section))

        if values is None:
            values = {}
        elif not isinstance(values, dict):
            raise ValueError("Options section {} should be a mapping.".format(section))

        cls = classes[section]
        unknown = set(values.keys()) - set(cls().keys())
        if unknown:
            raise ValueError(
                "Unknown options for {}: {}".format(section, ", ".join(sorted(unknown)))
            )

        options[section] = cls(**values)

    return options
