"""Program data model: operation calls, parameters and parameter links.

A program is an ordered list of operation calls. Each call names a registered
operation definition and supplies parameters, either as literal values or as
links that are resolved immediately before the call executes:

- ContextKeyLink: the current value stored under a key in the context store
- OperationLink: the result produced by an earlier call in the program

Programs are plain data and can be loaded from YAML files:

    name: hello_world
    calls:
      - call_id: demo.setContext
        op_def_id: setContext
        params:
          - {name: key, value: message}
          - {name: value, value: Hello}
      - call_id: demo.showDialog
        op_def_id: showDialog
        params:
          - name: text
            link: {type: contextKey, param_name: text, context_key: message}
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

logger = logging.getLogger(__name__)

# Literal parameter values. Order matters: bool must be tried before int.
ParamValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

DEFAULT_CALL_ID_DELIMITER = "."


class LinkType(str, Enum):
    """Kinds of parameter links."""
    CONTEXT_KEY = "contextKey"
    OPERATION = "operation"


class ContextKeyLink(BaseModel):
    """Link a parameter to the value stored under a context key."""
    model_config = ConfigDict(frozen=True)

    type: Literal["contextKey"] = LinkType.CONTEXT_KEY.value
    param_name: str
    context_key: str = Field(..., min_length=1)


class OperationLink(BaseModel):
    """Link a parameter to the result of another call."""
    model_config = ConfigDict(frozen=True)

    type: Literal["operation"] = LinkType.OPERATION.value
    param_name: str
    target_call_id: str = Field(..., min_length=1)


ParameterLink = Annotated[
    Union[ContextKeyLink, OperationLink],
    Field(discriminator="type"),
]


class OperationParam(BaseModel):
    """A single call parameter, literal or linked.

    When ``link`` is set the static ``value`` carries no meaning; the resolver
    replaces it with the linked value at call time.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    value: Optional[ParamValue] = None
    link: Optional[ParameterLink] = None

    @model_validator(mode="after")
    def _check_link_target(self) -> "OperationParam":
        if self.link is not None and self.link.param_name != self.name:
            raise ValueError(
                f"Link for parameter '{self.name}' names parameter '{self.link.param_name}'"
            )
        return self

    @property
    def is_linked(self) -> bool:
        return self.link is not None


class OperationCall(BaseModel):
    """A concrete, parameterized invocation of an operation definition."""
    model_config = ConfigDict(frozen=True)

    call_id: str = Field(..., min_length=1, description="Stable, unique call identifier")
    op_def_id: str = Field(..., min_length=1, description="Registered operation definition id")
    description: str = ""
    params: List[OperationParam] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_param_names(self) -> "OperationCall":
        seen = set()
        for param in self.params:
            if param.name in seen:
                raise ValueError(
                    f"Duplicate parameter '{param.name}' in call '{self.call_id}'"
                )
            seen.add(param.name)
        return self

    def get_param(self, name: str) -> Optional[OperationParam]:
        """Return the parameter with the given name, if supplied."""
        for param in self.params:
            if param.name == name:
                return param
        return None

    def linked_call_ids(self) -> List[str]:
        """Ids of calls whose results this call depends on."""
        return [
            param.link.target_call_id
            for param in self.params
            if isinstance(param.link, OperationLink)
        ]


class Program(BaseModel):
    """An ordered list of operation calls."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    calls: List[OperationCall] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_call_ids(self) -> "Program":
        seen = set()
        for call in self.calls:
            if call.call_id in seen:
                raise ValueError(f"Duplicate call id '{call.call_id}' in program '{self.name}'")
            seen.add(call.call_id)
        return self

    def call_index(self) -> Dict[str, OperationCall]:
        """Map call ids to calls."""
        return {call.call_id: call for call in self.calls}

    def get_call(self, call_id: str) -> Optional[OperationCall]:
        return self.call_index().get(call_id)

    def to_dict(self) -> Dict[str, Any]:
        """Export to a plain dictionary suitable for YAML/JSON."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Program":
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, path: Path) -> "Program":
        """Load a program from a YAML file.

        Args:
            path: Path to the YAML program file

        Returns:
            Validated Program

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a YAML mapping
            pydantic.ValidationError: If the program is malformed
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Program file {path} must contain a mapping")

        program = cls.from_dict(data)
        logger.info(f"Loaded program '{program.name}' ({len(program.calls)} calls) from {path}")
        return program

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


def make_call_id(owner_id: str, operation_id: str, delimiter: str = DEFAULT_CALL_ID_DELIMITER) -> str:
    """Build a hierarchical call id, e.g. ``demo.setContext``."""
    return f"{owner_id}{delimiter}{operation_id}"
