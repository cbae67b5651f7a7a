"""Name forms and template parameter binding.

``derive_names`` computes every variant of a command name that templates may
need (plural, singular, slug, case variants).  ``build_binding`` flattens
those forms into the read-only placeholder mapping handed to the renderer.
Both are pure functions.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


ParameterBinding = Mapping[str, str]


# ---------------------------------------------------------------------------
# English inflection
# ---------------------------------------------------------------------------

_IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "criterion": "criteria",
    "datum": "data",
    "analysis": "analyses",
    "status": "statuses",
    "quiz": "quizzes",
}

_IRREGULAR_SINGULARS: dict[str, str] = {v: k for k, v in _IRREGULAR_PLURALS.items()}

_UNCOUNTABLE: frozenset[str] = frozenset({
    "equipment",
    "information",
    "rice",
    "money",
    "species",
    "series",
    "fish",
    "sheep",
    "deer",
    "news",
    "metadata",
    "feedback",
    "software",
})

_F_TO_VES: frozenset[str] = frozenset({
    "leaf", "loaf", "half", "knife", "life", "wife", "wolf", "shelf", "thief", "calf",
})

_O_TO_OES: frozenset[str] = frozenset({
    "hero", "potato", "tomato", "echo", "veto", "torpedo", "embargo", "domino", "mosquito",
})

# Singulars ending in -ie, so "-ies" does not become "-y".
_IE_NOUNS: frozenset[str] = frozenset({
    "movie", "cookie", "tie", "pie", "lie", "die", "zombie", "rookie", "hippie",
    "calorie", "brownie", "genie", "selfie", "smoothie", "sortie", "goalie", "newbie",
})

# Singulars ending in -e whose plural would otherwise lose the "es".
_E_NOUNS: frozenset[str] = frozenset({
    "cache", "niche", "ache", "headache", "avalanche",
    "use", "fuse", "muse", "ruse", "excuse", "abuse", "refuse", "recluse",
})

_VOWELS = "aeiou"

_LAST_WORD = re.compile(r"([A-Za-z]+)([^A-Za-z]*)$")


def _match_case(source: str, target: str) -> str:
    """Apply the letter case of *source* to *target*."""
    if source.isupper() and len(source) > 1:
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR_PLURALS:
        return _match_case(word, _IRREGULAR_PLURALS[lower])
    if lower in _IRREGULAR_SINGULARS:
        return word
    if lower in _F_TO_VES:
        stem = lower[:-2] if lower.endswith("fe") else lower[:-1]
        return _match_case(word, stem + "ves")
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        suffix = "IES" if word.isupper() else "ies"
        return word[:-1] + suffix
    if lower.endswith(("s", "sh", "ch", "x", "z")) or lower in _O_TO_OES:
        return word + ("ES" if word.isupper() else "es")
    return word + ("S" if word.isupper() and len(word) > 1 else "s")


def _singularize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR_SINGULARS:
        return _match_case(word, _IRREGULAR_SINGULARS[lower])
    if lower in _IRREGULAR_PLURALS:
        return word
    if lower.endswith("ves"):
        stem = lower[:-3]
        if stem + "f" in _F_TO_VES:
            return _match_case(word, stem + "f")
        if stem + "fe" in _F_TO_VES:
            return _match_case(word, stem + "fe")
    if lower.endswith("ies"):
        if lower[:-1] in _IE_NOUNS:
            return word[:-1]
        if len(lower) > 4:
            return word[:-3] + ("Y" if word.isupper() else "y")
    if lower.endswith("es") and lower[:-1] in _E_NOUNS:
        return word[:-1]
    if lower.endswith("oes") and lower[:-2] in _O_TO_OES:
        return word[:-2]
    if lower.endswith(("sses", "shes", "ches", "xes", "zzes")):
        return word[:-2]
    # bus -> buses, but house -> houses
    if lower.endswith("uses") and len(lower) > 4 and lower[-5] not in _VOWELS:
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def _inflect_last_word(name: str, inflect) -> str:
    """Inflect only the trailing alphabetic word of *name*.

    ``ship_order`` -> ``ship_orders``; ``createUser`` -> ``createUsers``.
    Anything after the last word (digits, punctuation) is kept as-is.
    """
    match = _LAST_WORD.search(name)
    if not match:
        return name
    word, tail = match.group(1), match.group(2)
    head = name[: match.start()]
    # camelCase: only the final capitalised segment is the noun
    camel_parts = re.findall(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])", word)
    if len(camel_parts) > 1 and "".join(camel_parts) == word:
        head += "".join(camel_parts[:-1])
        word = camel_parts[-1]
    return head + inflect(word) + tail


def pluralize(name: str) -> str:
    """Return the English plural of *name* (last word only)."""
    return _inflect_last_word(name, _pluralize_word)


def singularize(name: str) -> str:
    """Return the English singular of *name* (last word only)."""
    return _inflect_last_word(name, _singularize_word)


# ---------------------------------------------------------------------------
# Case helpers
# ---------------------------------------------------------------------------


def slugify(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    s1 = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", value.strip())
    slug = re.sub(r"[^a-z0-9]+", "-", s1.lower())
    return slug.strip("-")


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value.strip())
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# Name forms and binding
# ---------------------------------------------------------------------------


class NameForms(BaseModel):
    """Every name variant available to templates for one command name."""

    model_config = ConfigDict(frozen=True)

    command_name: str
    plural: str
    singular: str
    slug: str
    snake: str
    pascal: str
    camel: str

    def as_binding(self) -> dict[str, str]:
        """Return the forms keyed by their template placeholder names."""
        return {
            "commandName": self.command_name,
            "commandNamePlural": self.plural,
            "commandNameSingular": self.singular,
            "commandNameSlug": self.slug,
            "commandNameSnake": self.snake,
            "commandNamePascal": self.pascal,
            "commandNameCamel": self.camel,
        }


def derive_names(command_name: str) -> NameForms:
    """Compute all name forms for *command_name*.

    The name itself is kept verbatim; no case transformation is applied to
    ``command_name``, only to the derived variants.
    """
    return NameForms(
        command_name=command_name,
        plural=pluralize(command_name),
        singular=singularize(command_name),
        slug=slugify(command_name),
        snake=snake_case(command_name),
        pascal=pascal_case(command_name),
        camel=camel_case(command_name),
    )


def build_binding(
    forms: NameForms,
    extra: Mapping[str, str] | None = None,
) -> ParameterBinding:
    """Flatten *forms* (plus optional *extra* keys) into a read-only binding.

    Raises:
        ValueError: If an extra key would shadow a derived name form.
    """
    binding = forms.as_binding()
    for key, value in (extra or {}).items():
        if key in binding:
            raise ValueError(f"Extra parameter {key!r} shadows a derived name form")
        binding[key] = str(value)
    return MappingProxyType(binding)
