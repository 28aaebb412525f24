"""
Patient search: turns the search bar's text and filter selections into one
read of the patients table, with each patient's owner joined in.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from ..models.patient import Patient
from ..models.search import AGE_RANGES, ALL, AgeBracket, FilterName
from ..exceptions import InvalidFilterValue
from ..store.predicates import AnyOf, Contains, Equals, EqualsIgnoreCase, InRange, Predicate
from ..store.table_store import Join, TableStore, table_store

PATIENTS = "patients"
OWNER_JOIN = Join(table="owners", local_field="owner_id", as_field="owner")


@dataclass(frozen=True)
class PatientQuery:
    """A composed read: all predicates are ANDed, joins are applied after."""
    predicates: Tuple[Predicate, ...] = ()
    joins: Tuple[Join, ...] = field(default=(OWNER_JOIN,))


def age_range(bracket: str) -> Tuple[float, float]:
    try:
        return AGE_RANGES[AgeBracket(bracket)]
    except ValueError:
        raise InvalidFilterValue(FilterName.AGE.value, bracket) from None


def filter_predicate(name: str, value: str) -> Predicate:
    """Predicate for one selected filter option."""
    try:
        filter_name = FilterName(name)
    except ValueError:
        raise InvalidFilterValue(name, value) from None

    if filter_name is FilterName.SPECIES:
        return Equals("species", value)
    if filter_name is FilterName.BREED:
        return EqualsIgnoreCase("breed", value)
    if filter_name is FilterName.AGE:
        lower, upper = age_range(value)
        return InRange("age", lower, upper)
    raise InvalidFilterValue(name, value)


def compose_patient_query(query: str, filters: Optional[Mapping[str, str]] = None) -> PatientQuery:
    """
    Build the patient read for a search.

    A non-empty ``query`` must appear, case-insensitively, in the name or
    the breed. Every filter whose value is neither empty nor ``"all"`` adds
    one more condition.
    """
    predicates: List[Predicate] = []

    if query:
        predicates.append(AnyOf((Contains("name", query), Contains("breed", query))))

    for name, value in (filters or {}).items():
        if not value or value == ALL:
            continue
        predicates.append(filter_predicate(name, value))

    return PatientQuery(predicates=tuple(predicates))


async def search_patients(
    query: str = "",
    filters: Optional[Mapping[str, str]] = None,
    store: TableStore = table_store
) -> List[Patient]:
    """Run a patient search against the store in a single request."""
    composed = compose_patient_query(query, filters)
    records = await store.query_table(PATIENTS, filters=composed.predicates, joins=composed.joins)
    return [Patient(**record) for record in records]
