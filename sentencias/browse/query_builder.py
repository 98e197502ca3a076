"""Translate (filter, sort) into store predicates plus one order-by clause.

Pure functions, no I/O. The store can only combine a range filter with an
order-by on the same field, and an equality filter with a different order-by
field only through a declared composite index, so the builder pins the order-by
field to the filtered field whenever that is required and hands the effective
sort back to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sentencias.browse.schemas import ExactMatch, FilterSpec, NoFilter, PrefixRange, SortSpec
from sentencias.db.repo.schemas import PREFIX_SENTINEL, OrderBy, Predicate


@dataclass(slots=True, frozen=True)
class QueryPlan:
    predicates: tuple[Predicate, ...]
    order_by: OrderBy

    @property
    def effective_sort(self) -> SortSpec:
        return SortSpec(self.order_by.field, self.order_by.direction)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_active(filter_spec: FilterSpec) -> bool:
    """Blank inputs never produce predicates."""
    if isinstance(filter_spec, ExactMatch):
        return not _is_blank(filter_spec.value)
    if isinstance(filter_spec, PrefixRange):
        return not _is_blank(filter_spec.prefix)
    return False


def build_query(
    filter_spec: FilterSpec | None,
    sort: SortSpec,
    *,
    composite_indexes: Iterable[tuple[str, str]] = (),
) -> QueryPlan:
    if filter_spec is None or isinstance(filter_spec, NoFilter) or not is_active(filter_spec):
        return QueryPlan(predicates=(), order_by=OrderBy(sort.field, sort.direction))

    if isinstance(filter_spec, PrefixRange):
        f = filter_spec.field
        return QueryPlan(
            predicates=(
                Predicate(f, ">=", filter_spec.prefix),
                Predicate(f, "<=", filter_spec.prefix + PREFIX_SENTINEL),
            ),
            order_by=OrderBy(f, sort.direction),
        )

    f = filter_spec.field
    order_field = sort.field
    if order_field != f and (f, order_field) not in set(composite_indexes):
        order_field = f
    return QueryPlan(
        predicates=(Predicate(f, "==", filter_spec.value),),
        order_by=OrderBy(order_field, sort.direction),
    )
