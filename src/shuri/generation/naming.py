"""
Naming helpers.

Accepts camelCase, PascalCase, kebab-case, snake_case, space separated and
mixed input ("my-Component Name").
"""
import re
from dataclasses import dataclass


def pascal_case(value: str) -> str:
    """'my component' -> 'MyComponent'"""
    result = re.sub(r"[-_\s]+(.)?", lambda m: m.group(1).upper() if m.group(1) else "", value)
    return re.sub(r"^[a-z]", lambda m: m.group(0).upper(), result)


def kebab_case(value: str) -> str:
    """'My Component' -> 'my-component'"""
    result = re.sub(r"([a-z])([A-Z])", r"\1-\2", value)
    result = re.sub(r"[\s_-]+", "-", result).lower()
    return result.strip("-")


def display_name(value: str) -> str:
    """'user-button' -> 'User button'"""
    if not value:
        return value
    return (value[0].upper() + value[1:].lower()).replace("-", " ")


def title_words(kebab: str) -> str:
    """'user-button' -> 'User button', splitting on hyphens, commas and spaces."""
    capital = kebab[:1].upper() + kebab[1:]
    return " ".join(part for part in re.split(r"[-, ]+", capital) if part)


@dataclass(frozen=True)
class ComponentNames:
    """
    Naming variants for one component.

    Attributes:
        pascal: Identifier used for imports and the component name
        kebab: Identifier used for routes, CSS classes and docs files
        file_name: Base name of the generated files
        folder: Directory name of the component
        effective: The root option when given, else the raw name; docs are keyed by it
    """
    pascal: str
    kebab: str
    file_name: str
    folder: str
    effective: str

    @property
    def docs_kebab(self) -> str:
        return kebab_case(self.effective)

    @property
    def display(self) -> str:
        return display_name(self.docs_kebab)


def resolve_names(name: str, kebab: bool = False, root: str | None = None) -> ComponentNames:
    pascal = pascal_case(name)
    kebab_name = kebab_case(name)
    file_name = kebab_name if kebab else pascal
    return ComponentNames(
        pascal=pascal,
        kebab=kebab_name,
        file_name=file_name,
        folder=root or file_name,
        effective=root or name,
    )
