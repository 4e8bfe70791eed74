"""
Configuration Data Model
========================

Runtime-facing structures produced by the compiler: typed values, the
extractor/filter/producer catalogue, peripheral shapes, protocol event
codes and the Config tree that ties them together.
"""

from ross_dsl.config.cron import CronExpression, CronField
from ross_dsl.config.model import (
    AndMatcher,
    Config,
    Creator,
    EventProcessor,
    Matcher,
    NotMatcher,
    OrMatcher,
    SingleMatcher,
    conjoin,
)
from ross_dsl.config.peripherals import Peripheral
from ross_dsl.config.values import (
    BcmValue,
    BcmValueKind,
    MessageValue,
    ParameterType,
    RelayDoubleExclusiveValue,
    RelayValue,
    RelayValueKind,
    Value,
    ValueType,
)

__all__ = [
    "AndMatcher",
    "BcmValue",
    "BcmValueKind",
    "Config",
    "Creator",
    "CronExpression",
    "CronField",
    "EventProcessor",
    "Matcher",
    "MessageValue",
    "NotMatcher",
    "OrMatcher",
    "ParameterType",
    "Peripheral",
    "RelayDoubleExclusiveValue",
    "RelayValue",
    "RelayValueKind",
    "SingleMatcher",
    "Value",
    "ValueType",
    "conjoin",
]
