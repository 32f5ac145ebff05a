from ._core import Config, get_config, set_config, setup_logger
from ._flat import Bounded, Flat, MaybeBounded, MaybeNested, Nested, Scalar, classify
from ._keyed import KeyedSeq
from ._pull import PullHandle
from ._results import (
    NONE,
    Err,
    NoneOption,
    Ok,
    Option,
    OptionUnwrapError,
    Result,
    ResultUnwrapError,
    Some,
)
from ._seq import Seq
from ._types import Consumer, KeyedConsumer, Pair

__all__ = [
    "NONE",
    "Bounded",
    "Config",
    "Consumer",
    "Err",
    "Flat",
    "KeyedConsumer",
    "KeyedSeq",
    "MaybeBounded",
    "MaybeNested",
    "Nested",
    "NoneOption",
    "Ok",
    "Option",
    "OptionUnwrapError",
    "Pair",
    "PullHandle",
    "Result",
    "ResultUnwrapError",
    "Scalar",
    "Seq",
    "Some",
    "classify",
    "get_config",
    "set_config",
    "setup_logger",
]
