from typing import Any, FrozenSet, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fallwire.domain.enums import BindingKind, ComponentState, ValueKind


class FieldBinding(BaseModel):
    """Value object describing how one attribute of a component is injected.

    Attributes:
        field_name: The attribute the resolved value is assigned to.
        kind: Whether the field takes a named value, a named component or a typed component.
        value_name: Name in the value store (VALUE bindings).
        value_kind: Destination kind used to convert the value (VALUE bindings).
        target_name: Registered component name (NAME bindings).
        target_type: Requested concrete or capability type (TYPE bindings).
        by_reference: Assign the live instance when true, a shallow copy otherwise.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field_name: str = Field(..., min_length=1, description="Attribute receiving the injected value.")
    kind: BindingKind = Field(..., description="How the injected value is found.")
    value_name: Optional[str] = Field(default=None, description="Name of the value to inject.")
    value_kind: ValueKind = Field(default=ValueKind.ANY, description="Destination kind of the value.")
    target_name: Optional[str] = Field(default=None, description="Name of the component to inject.")
    target_type: Optional[Any] = Field(default=None, description="Type of the component to inject.")
    by_reference: bool = Field(default=True, description="Inject the live instance rather than a copy.")

    @model_validator(mode="after")
    def _check_target(self) -> "FieldBinding":
        if self.kind == BindingKind.VALUE and not self.value_name:
            raise ValueError(f"value binding for '{self.field_name}' needs a value_name")
        if self.kind == BindingKind.NAME and not self.target_name:
            raise ValueError(f"name binding for '{self.field_name}' needs a target_name")
        if self.kind == BindingKind.TYPE and self.target_type is None:
            raise ValueError(f"type binding for '{self.field_name}' needs a target_type")
        return self


class Component(BaseModel):
    """A registered instance taking part in wiring.

    The instance is held by reference; the resolver sets its attributes in
    place and callers observe the result through their own references.

    Attributes:
        name: Globally unique name.
        instance: The live object.
        component_type: Concrete type the component is indexed under.
        capabilities: Capability types the component advertises.
        bindings: Injectable fields, in declaration order.
        state: Current resolution state.
        run_hooks: Whether lifecycle hooks are called; false for stand-ins.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Unique component name.")
    instance: Any = Field(..., description="The live registered instance.")
    component_type: Type = Field(..., description="Concrete type used for type-based lookup.")
    capabilities: FrozenSet[Type] = Field(
        default_factory=frozenset,
        description="Capability types satisfied by this component.",
    )
    bindings: Tuple[FieldBinding, ...] = Field(
        default_factory=tuple,
        description="Bindings of the injectable fields.",
    )
    state: ComponentState = Field(
        default=ComponentState.REGISTERED,
        description="Resolution state of the component.",
    )
    run_hooks: bool = Field(default=True, description="Call lifecycle hooks on the instance.")

    @property
    def is_wired(self) -> bool:
        return self.state == ComponentState.WIRED
