"""k1s0 openfeature provider library."""

from .client import (
    DataEngineProtocol,
    EngineProtocol,
    VariableEngineAdapter,
    VariableEngineProtocol,
    VariationEngineProtocol,
)
from .config import LogSection, ProviderConfig, load_config
from .converter import (
    to_backend_records,
    to_context_value,
    to_evaluation_context,
    to_generic_value,
)
from .exceptions import FeatureError, FeatureErrorCodes, ProviderError, ProviderErrorCodes
from .logger import configure_logging, new_logger
from .memory import InMemoryVariationEngine
from .models import (
    BackendData,
    Conversion,
    CustomData,
    EvaluationContext,
    Value,
    ValueKind,
    Variable,
    Variation,
)
from .provider import VariationProvider
from .resolver import Resolver
from .types import ConversionField, CustomDataField, DataType, make_conversion, make_custom_data

__all__ = [
    "BackendData",
    "Conversion",
    "ConversionField",
    "CustomData",
    "CustomDataField",
    "DataEngineProtocol",
    "DataType",
    "EngineProtocol",
    "EvaluationContext",
    "FeatureError",
    "FeatureErrorCodes",
    "InMemoryVariationEngine",
    "LogSection",
    "ProviderConfig",
    "ProviderError",
    "ProviderErrorCodes",
    "Resolver",
    "Value",
    "ValueKind",
    "Variable",
    "VariableEngineAdapter",
    "VariableEngineProtocol",
    "VariationEngineProtocol",
    "VariationProvider",
    "configure_logging",
    "load_config",
    "make_conversion",
    "make_custom_data",
    "new_logger",
    "to_backend_records",
    "to_context_value",
    "to_evaluation_context",
    "to_generic_value",
]
