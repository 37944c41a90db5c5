"""Generators, shrinkers and input modifiers used by quantifiers."""

from rosecheck.gen.arbitrary import (
    Arbitrary,
    booleans,
    floats,
    integers,
    lists,
    no_shrink,
    optionals,
    sampled_from,
    shrink_float,
    shrink_integral,
    shrink_list,
    text,
    tuples,
)
from rosecheck.gen.generator import (
    Gen,
    choose,
    choose_float,
    elements,
    frequency,
    list_of,
    one_of,
    sequence,
    sized,
    tuple_of,
    vector_of,
)
from rosecheck.gen.modifiers import ArrayOf, Blind, NonNegative, NonZero, OptionalOf, Positive, Static

__all__ = [
    "Arbitrary",
    "ArrayOf",
    "Blind",
    "Gen",
    "NonNegative",
    "NonZero",
    "OptionalOf",
    "Positive",
    "Static",
    "booleans",
    "choose",
    "choose_float",
    "elements",
    "floats",
    "frequency",
    "integers",
    "list_of",
    "lists",
    "no_shrink",
    "one_of",
    "optionals",
    "sampled_from",
    "sequence",
    "shrink_float",
    "shrink_integral",
    "shrink_list",
    "sized",
    "text",
    "tuple_of",
    "tuples",
    "vector_of",
]
