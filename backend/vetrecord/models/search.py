"""
Search bar models: filter dimensions, their options and the search state.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Tuple
from enum import Enum

# Selecting this option removes the constraint of a filter
ALL = "all"


class FilterName(str, Enum):
    """Filter dimensions the patient search understands."""
    SPECIES = "species"
    BREED = "breed"
    AGE = "age"


class AgeBracket(str, Enum):
    PUPPY = "puppy"
    YOUNG = "young"
    ADULT = "adult"
    SENIOR = "senior"


# Half-open [min, max) ranges in years, covering [0, 100) without gaps
AGE_RANGES: Dict[AgeBracket, Tuple[float, float]] = {
    AgeBracket.PUPPY: (0, 1),
    AgeBracket.YOUNG: (1, 3),
    AgeBracket.ADULT: (3, 8),
    AgeBracket.SENIOR: (8, 100),
}


class FilterOption(BaseModel):
    value: str
    label: str


class SearchFilter(BaseModel):
    """A named filter and its selectable options."""
    name: FilterName
    label: str
    options: List[FilterOption]

    def accepts(self, value: str) -> bool:
        return value == ALL or any(option.value == value for option in self.options)


class SearchState(BaseModel):
    """Settled query text and the selected option per filter."""
    query: str = ""
    filters: Dict[str, str] = Field(default_factory=dict)


DEFAULT_FILTERS: List[SearchFilter] = [
    SearchFilter(
        name=FilterName.SPECIES,
        label="Espécie",
        options=[
            FilterOption(value="dog", label="Cachorro"),
            FilterOption(value="cat", label="Gato"),
            FilterOption(value="bird", label="Pássaro"),
            FilterOption(value="other", label="Outro"),
        ],
    ),
    SearchFilter(
        name=FilterName.BREED,
        label="Raça",
        options=[
            FilterOption(value="labrador", label="Labrador"),
            FilterOption(value="poodle", label="Poodle"),
            FilterOption(value="siamese", label="Siamês"),
            FilterOption(value="persian", label="Persa"),
        ],
    ),
    SearchFilter(
        name=FilterName.AGE,
        label="Idade",
        options=[
            FilterOption(value=AgeBracket.PUPPY.value, label="Filhote (0-1 ano)"),
            FilterOption(value=AgeBracket.YOUNG.value, label="Jovem (1-3 anos)"),
            FilterOption(value=AgeBracket.ADULT.value, label="Adulto (3-8 anos)"),
            FilterOption(value=AgeBracket.SENIOR.value, label="Idoso (8+ anos)"),
        ],
    ),
]
