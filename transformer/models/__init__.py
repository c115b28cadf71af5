"""Program data models: operation calls, parameters and parameter links."""

from .program import (
    ContextKeyLink,
    LinkType,
    OperationCall,
    OperationLink,
    OperationParam,
    ParameterLink,
    ParamValue,
    Program,
    make_call_id,
)

__all__ = [
    "ContextKeyLink",
    "LinkType",
    "OperationCall",
    "OperationLink",
    "OperationParam",
    "ParameterLink",
    "ParamValue",
    "Program",
    "make_call_id",
]
