import logging

from ._core import Config, get_config, set_config
from ._results import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._sequence import Sequence, stream

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NONE",
    "Config",
    "NoneOption",
    "Option",
    "OptionUnwrapError",
    "Sequence",
    "Some",
    "get_config",
    "set_config",
    "stream",
]
