import pytest
from pymongo.errors import ServerSelectionTimeoutError

from conftest import run
from vetrecord.exceptions import InvalidFilterValue, RemoteQueryError
from vetrecord.models.search import AGE_RANGES, AgeBracket
from vetrecord.services.query_composer import (
    OWNER_JOIN,
    age_range,
    compose_patient_query,
    search_patients,
)
from vetrecord.store.predicates import AnyOf, Contains, Equals, EqualsIgnoreCase, InRange
from vetrecord.store.table_store import TableStore


def _names(patients):
    return sorted(p.name for p in patients)


def test_empty_search_has_no_predicates_and_joins_owner():
    composed = compose_patient_query("", {"species": "all", "age": "all", "breed": ""})

    assert composed.predicates == ()
    assert composed.joins == (OWNER_JOIN,)


def test_text_matches_name_or_breed():
    composed = compose_patient_query("lab", {})

    assert composed.predicates == (AnyOf((Contains("name", "lab"), Contains("breed", "lab"))),)


def test_each_selected_filter_adds_a_predicate():
    composed = compose_patient_query("", {"species": "dog", "age": "young", "breed": "poodle"})

    assert composed.predicates == (
        Equals("species", "dog"),
        InRange("age", 1, 3),
        EqualsIgnoreCase("breed", "poodle"),
    )


def test_age_brackets_cover_zero_to_hundred_without_gaps():
    ranges = sorted(AGE_RANGES.values())

    assert ranges[0][0] == 0
    assert ranges[-1][1] == 100
    for (_, upper), (lower, _) in zip(ranges, ranges[1:]):
        assert upper == lower
    assert age_range("senior") == AGE_RANGES[AgeBracket.SENIOR]


def test_unknown_age_bracket_is_rejected():
    with pytest.raises(InvalidFilterValue) as exc_info:
        compose_patient_query("", {"age": "ancient"})

    assert exc_info.value.name == "age"


def test_unknown_filter_name_is_rejected():
    with pytest.raises(InvalidFilterValue):
        compose_patient_query("", {"color": "black"})


def test_no_text_and_all_filters_returns_every_patient(clinic):
    patients = run(search_patients("", {"species": "all", "age": "all"}))

    assert len(patients) == len(clinic["patients"])


def test_text_search_is_case_insensitive_on_name_or_breed(clinic):
    patients = run(search_patients("LAB", {}))

    assert _names(patients) == ["Lab", "Labrador", "Max"]
    for patient in patients:
        assert "lab" in patient.name.lower() or "lab" in patient.breed.lower()


def test_lab_dogs_only(clinic):
    patients = run(search_patients("lab", {"species": "dog", "age": "all"}))

    assert _names(patients) == ["Labrador", "Max"]
    assert all(p.species.value == "dog" for p in patients)


@pytest.mark.parametrize("bracket", ["puppy", "young", "adult", "senior"])
def test_age_bracket_bounds(clinic, bracket):
    lower, upper = AGE_RANGES[AgeBracket(bracket)]

    patients = run(search_patients("", {"age": bracket}))

    assert patients
    assert all(lower <= p.age < upper for p in patients)


def test_young_bracket_includes_lower_bound_only(clinic):
    patients = run(search_patients("", {"age": "young"}))

    # Bolt is exactly 1, Kiwi exactly 3
    assert _names(patients) == ["Bolt", "Lab"]


def test_owner_is_joined_when_present(clinic):
    patients = {p.name: p for p in run(search_patients("", {}))}

    assert patients["Max"].owner.name == "João Silva"
    assert patients["Bolt"].owner is None


def test_store_failure_raises_remote_query_error():
    class _Collection:
        def aggregate(self, pipeline):
            raise ServerSelectionTimeoutError("no servers")

    store = TableStore(get_collection=lambda name: _Collection())

    with pytest.raises(RemoteQueryError) as exc_info:
        run(search_patients("lab", {}, store=store))

    assert exc_info.value.table == "patients"
    assert isinstance(exc_info.value.cause, ServerSelectionTimeoutError)
