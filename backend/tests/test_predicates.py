from vetrecord.store.predicates import AnyOf, Contains, Equals, EqualsIgnoreCase, InRange, combine


def test_range_is_half_open():
    assert InRange("age", 1, 3).to_filter() == {"age": {"$gte": 1, "$lt": 3}}


def test_contains_matches_text_literally():
    rendered = Contains("name", "a.b*").to_filter()

    assert rendered == {"name": {"$regex": r"a\.b\*", "$options": "i"}}


def test_equals_ignore_case_is_anchored():
    assert EqualsIgnoreCase("breed", "labrador").to_filter() == {
        "breed": {"$regex": "^labrador$", "$options": "i"}
    }


def test_any_of_renders_or():
    predicate = AnyOf((Contains("name", "lab"), Contains("breed", "lab")))

    assert predicate.to_filter() == {
        "$or": [
            {"name": {"$regex": "lab", "$options": "i"}},
            {"breed": {"$regex": "lab", "$options": "i"}},
        ]
    }


def test_combine():
    assert combine([]) == {}
    assert combine([Equals("species", "dog")]) == {"species": "dog"}
    assert combine([Equals("species", "dog"), InRange("age", 0, 1)]) == {
        "$and": [{"species": "dog"}, {"age": {"$gte": 0, "$lt": 1}}]
    }
