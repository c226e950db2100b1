"""
Capability Registry

Holds the tool, resource and prompt descriptors of the server and dispatches
invocation requests to them. A registry is populated once at startup, frozen,
and then passed by reference to the transports; it is never mutated while
requests are being served.

Dispatch flow:
1. look up the descriptor by (category, name); resources are looked up by URI
2. validate the raw argument bag against the descriptor's pydantic schema
3. call the handler (sync or async) with the validated arguments
4. wrap the handler's return value in the category's envelope
"""

import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import MCPServerError, NotFoundError, RegistrationError, ServerError, ValidationError
from .models import PromptMessage, ResourceContent, TextContent

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Capability categories."""
    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


class NoArguments(BaseModel):
    """Schema for capabilities that take no arguments."""
    model_config = ConfigDict(extra="ignore")


Handler = Callable[[BaseModel], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class CapabilityDescriptor:
    """A registered (schema, handler) pair for a named capability."""
    category: Category
    name: str
    description: str
    schema: Type[BaseModel]
    handler: Handler = field(repr=False)
    uri: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def key(self) -> str:
        """Lookup key within the category: the URI for resources, the name otherwise."""
        if self.category is Category.RESOURCE:
            return self.uri
        return self.name

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the accepted arguments."""
        schema = self.schema.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema

    def parameters(self) -> Dict[str, Dict[str, Any]]:
        """Compact per-field summary: type, description, default, required."""
        summary = {}
        properties = self.input_schema()["properties"]
        for field_name, info in self.schema.model_fields.items():
            key = info.alias or field_name
            prop = properties.get(key, {})
            entry = {
                "type": _describe_type(prop),
                "description": info.description,
                "required": info.is_required(),
            }
            if not info.is_required() and info.default is not None:
                entry["default"] = info.default
            summary[key] = entry
        return summary


@dataclass(frozen=True)
class DispatchResult:
    """Result/error union returned by Registry.dispatch."""
    value: Any = None
    error: Optional[MCPServerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


def _describe_type(prop: Dict[str, Any]) -> str:
    if "enum" in prop:
        return "enum(" + ",".join(str(v) for v in prop["enum"]) + ")"
    if "anyOf" in prop:
        types = [p.get("type") for p in prop["anyOf"] if p.get("type") not in (None, "null")]
        return "|".join(types) or "any"
    return prop.get("type", "any")


class Registry:
    """Write-once, read-many mapping of (category, key) to descriptors."""

    def __init__(self):
        self._capabilities: Dict[Category, Dict[str, CapabilityDescriptor]] = {
            category: {} for category in Category
        }
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        category: Category,
        name: str,
        schema: Type[BaseModel],
        handler: Handler,
        description: str = "",
        uri: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> CapabilityDescriptor:
        """
        Register a capability.

        Raises:
            RegistrationError: If the registry is frozen, the name (or URI for
                resources) is already taken in the category, or a resource is
                registered without a URI.
        """
        category = Category(category)
        if self._frozen:
            raise RegistrationError(f"Registry is frozen; cannot register {category.value} '{name}'")
        if category is Category.RESOURCE and not uri:
            raise RegistrationError(f"Resource '{name}' must declare a URI")

        descriptor = CapabilityDescriptor(
            category=category,
            name=name,
            description=description,
            schema=schema,
            handler=handler,
            uri=uri,
            mime_type=mime_type,
        )
        entries = self._capabilities[category]
        if descriptor.key in entries or any(d.name == name for d in entries.values()):
            raise RegistrationError(f"{category.value.capitalize()} '{name}' is already registered")

        entries[descriptor.key] = descriptor
        logger.debug(f"Registered {category.value} '{descriptor.key}'")
        return descriptor

    def freeze(self) -> "Registry":
        """Disallow further registration and expose read-only mappings."""
        self._capabilities = {
            category: MappingProxyType(entries)
            for category, entries in self._capabilities.items()
        }
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, category: Category, name: str) -> CapabilityDescriptor:
        category = Category(category)
        try:
            return self._capabilities[category][name]
        except KeyError:
            available = list(self._capabilities[category].keys())
            raise NotFoundError(
                f"{category.value.capitalize()} '{name}' not found. Available: {available}",
                data={"category": category.value, "name": name},
            ) from None

    def list(self, category: Category) -> List[CapabilityDescriptor]:
        """Descriptors of a category in registration order."""
        return list(self._capabilities[Category(category)].values())

    def names(self, category: Category) -> List[str]:
        return [descriptor.name for descriptor in self.list(category)]

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def validate(self, descriptor: CapabilityDescriptor, args: Optional[Mapping[str, Any]]) -> BaseModel:
        """Validate a raw argument bag against the descriptor's schema."""
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise ValidationError(
                f"Arguments for {descriptor.category.value} '{descriptor.name}' must be an object",
                fields=[{"field": "(root)", "message": "Input should be an object"}],
            )
        try:
            return descriptor.schema.model_validate(dict(args))
        except PydanticValidationError as exc:
            fields = [
                {
                    "field": ".".join(str(part) for part in error["loc"]) or "(root)",
                    "message": error["msg"],
                }
                for error in exc.errors()
            ]
            detail = "; ".join(f"{f['field']}: {f['message']}" for f in fields)
            raise ValidationError(
                f"Invalid arguments for {descriptor.category.value} '{descriptor.name}': {detail}",
                fields=fields,
            ) from None

    async def invoke(self, category: Category, name: str, args: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """
        Validate and run a capability, returning its enveloped result.

        Raises:
            NotFoundError: No capability matches.
            ValidationError: Arguments do not match the schema.
            MCPServerError: Any failure raised by the handler itself.
        """
        descriptor = self.get(category, name)
        params = self.validate(descriptor, args)
        result = descriptor.handler(params)
        if inspect.isawaitable(result):
            result = await result
        return self._wrap(descriptor, result)

    async def dispatch(self, category: Category, name: str, args: Optional[Mapping[str, Any]] = None) -> DispatchResult:
        """Like invoke, but every failure is returned as a DispatchResult error."""
        try:
            category = Category(category)
        except ValueError:
            return DispatchResult(error=NotFoundError(
                f"Unknown capability category '{category}'",
                data={"category": str(category), "name": name},
            ))

        try:
            value = await self.invoke(category, name, args)
        except MCPServerError as exc:
            logger.warning(f"{category.value} '{name}' failed: {exc}")
            return DispatchResult(error=exc)
        except Exception as exc:
            logger.error(f"Unexpected error in {category.value} '{name}': {exc}", exc_info=True)
            return DispatchResult(error=ServerError(str(exc), data={"cause": type(exc).__name__}))
        return DispatchResult(value=value)

    def _wrap(self, descriptor: CapabilityDescriptor, result: Any) -> List[Any]:
        items = result if isinstance(result, (list, tuple)) else [result]
        if descriptor.category is Category.TOOL:
            return [TextContent(text=item) if isinstance(item, str) else item for item in items]
        if descriptor.category is Category.RESOURCE:
            return [
                ResourceContent(uri=descriptor.uri, mimeType=descriptor.mime_type, text=item)
                if isinstance(item, str) else item
                for item in items
            ]
        return [
            PromptMessage(role="user", content=TextContent(text=item)) if isinstance(item, str) else item
            for item in items
        ]


__all__ = [
    "Category",
    "CapabilityDescriptor",
    "DispatchResult",
    "Handler",
    "NoArguments",
    "Registry",
]
