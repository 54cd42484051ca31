"""Value-type resolvers.

Each value type knows which operational fields make up its unit value and
volume. Resolvers register themselves with ``register_value_type``; a value
type without a resolver resolves to ``(0.0, 0.0)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from metria.models.enums import ValueType
from metria.models.inputs import OperationalMetrics


class UnitVolume(NamedTuple):
    unit_value: float
    volume: float


@dataclass(frozen=True)
class ValueTypeDefinition:
    """A registered resolver for one value type."""

    value_type: ValueType
    label: str
    description: str
    resolver_fn: Callable[..., UnitVolume]


# Global registry -- maps value type -> ValueTypeDefinition
_REGISTRY: dict[ValueType, ValueTypeDefinition] = {}


def register_value_type(
    value_type: ValueType,
    label: str,
    description: str,
) -> Callable:
    """Decorator to register a resolver function for a value type."""

    def decorator(fn: Callable[..., UnitVolume]) -> Callable[..., UnitVolume]:
        _REGISTRY[value_type] = ValueTypeDefinition(
            value_type=value_type,
            label=label,
            description=description,
            resolver_fn=fn,
        )
        return fn

    return decorator


def get_value_type(value_type: ValueType) -> Optional[ValueTypeDefinition]:
    """Look up a resolver definition by value type."""
    return _REGISTRY.get(value_type)


def get_all_value_types() -> dict[ValueType, ValueTypeDefinition]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)


def resolve_value_volume(
    value_type: ValueType,
    metrics: OperationalMetrics,
    *,
    ticket_delta: bool = True,
) -> UnitVolume:
    """Resolve the (unit value, volume) pair every downstream formula uses.

    ``ticket_delta`` enables the new-ticket override of ``revenue_increase``;
    the Standard engine turns it off.
    """
    definition = get_value_type(value_type)
    if definition is None:
        return UnitVolume(0.0, 0.0)
    return definition.resolver_fn(metrics, ticket_delta=ticket_delta)


@register_value_type(
    ValueType.COST_REDUCTION,
    label="Cost Reduction",
    description="Savings per unit times the volume traded.",
)
def resolve_cost_reduction(metrics: OperationalMetrics, *, ticket_delta: bool = True) -> UnitVolume:
    """unit = current_unit_cost - new_unit_cost; volume = volume_traded"""
    return UnitVolume(
        metrics.current_unit_cost - metrics.new_unit_cost,
        metrics.volume_traded,
    )


@register_value_type(
    ValueType.REVENUE_INCREASE,
    label="Revenue Increase",
    description=(
        "Ticket price times additional sales. When a higher new ticket is "
        "given, the positive ticket delta replaces the ticket price."
    ),
)
def resolve_revenue_increase(metrics: OperationalMetrics, *, ticket_delta: bool = True) -> UnitVolume:
    """unit = ticket_price (or new_ticket_price - ticket_price); volume = additional_sales"""
    unit_value = metrics.ticket_price
    if ticket_delta and metrics.ticket_price and metrics.new_ticket_price:
        delta = metrics.new_ticket_price - metrics.ticket_price
        if delta > 0:
            unit_value = delta
    return UnitVolume(unit_value, metrics.additional_sales)


@register_value_type(
    ValueType.NEW_REVENUE,
    label="New Revenue",
    description="Product price times the expected sales volume.",
)
def resolve_new_revenue(metrics: OperationalMetrics, *, ticket_delta: bool = True) -> UnitVolume:
    """unit = product_price; volume = sales_volume"""
    return UnitVolume(metrics.product_price, metrics.sales_volume)


@register_value_type(
    ValueType.COST_AVOIDANCE,
    label="Cost Avoidance",
    description="The avoided future cost, counted once as a single event.",
)
def resolve_cost_avoidance(metrics: OperationalMetrics, *, ticket_delta: bool = True) -> UnitVolume:
    """unit = future_predictable_cost (a total); volume = 1"""
    return UnitVolume(metrics.future_predictable_cost, 1.0)
