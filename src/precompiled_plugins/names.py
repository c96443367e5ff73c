"""Naming conventions for script plugins.

This module converts script file names into plugin identifiers and
type names. All functions are pure and total: they never fail, and
names that do not follow the expected conventions pass through
unchanged apart from the documented transformations.

The patterns defined here also back the declaration models used by
the plugin descriptor store.
"""

from re import compile as regexp
from typing import Annotated

from pydantic import Field

#: Conventional suffix of DSL build scripts.
SCRIPT_EXTENSION = '.gradle.kts'

#: A hyphen followed by a lowercase ASCII letter.
_KEBAB_PATTERN = regexp(r'-[a-z]')

#: Any character that is not allowed in a compiled script class name.
_INVALID_CLASS_CHARACTERS = regexp(r'\W')

#: Base pattern for wrapper type names: an uppercase letter, then
#: letters, digits and underscores only.
_CLASS_NAME_PATTERN = r'[A-Z]\w*'

CLASS_NAME_PATTERN = regexp(_CLASS_NAME_PATTERN)


PluginId = Annotated[
    str, Field(
        min_length=1,
        title='Plugin identifier',
        description=(
            'Identifier consumers use to apply the plugin by name. '
            'Either the script file name without its extension, or '
            'the script package followed by a dot and that name.'
        ),
        examples=[
            'my-plugin',
            'org.acme.my-plugin.init',
        ],
    ),
]

ClassName = Annotated[
    str, Field(
        pattern=rf'^{_CLASS_NAME_PATTERN}$',
        title='Implementation class',
        description=(
            'Name of the generated wrapper type implementing the plugin. '
            'Must start with an uppercase letter and contain no hyphens or dots.'
        ),
        examples=[
            'MyPlugin',
            'MyPluginInit',
        ],
    ),
]


def remove_script_extension(name: str, suffix: str = SCRIPT_EXTENSION) -> str:
    """Strip the script suffix from a file name.

    Args:
        name: File name, possibly ending with the suffix.
        suffix: Suffix to remove.

    Returns:
        The name without the suffix, or the name unchanged when it
        does not end with the suffix.
    """
    return name.removesuffix(suffix)


def capitalize(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def kebab_case_to_camel_case(text: str) -> str:
    """Convert a hyphen-delimited name to camel case.

    Every hyphen followed by a lowercase letter is replaced with the
    upper-cased letter. Matches are processed left to right and do
    not overlap; other hyphens are kept.

    Args:
        text: Hyphen-delimited name, for example `my-plugin`.

    Returns:
        Camel case name, for example `myPlugin`.
    """
    return _KEBAB_PATTERN.sub(lambda match: match.group()[1].upper(), text)


def kebab_case_to_pascal_case(text: str) -> str:
    """Convert a hyphen-delimited name to pascal case.

    Args:
        text: Hyphen-delimited name, for example `my-plugin`.

    Returns:
        Pascal case name, for example `MyPlugin`.
    """
    return capitalize(kebab_case_to_camel_case(text))


def script_class_name_for_file(file_name: str) -> str:
    """Return the class name the toolchain assigns to a compiled script.

    Only the last extension is dropped; every remaining character that
    is neither a letter nor a digit becomes an underscore, so
    `my-plugin.init.gradle.kts` compiles to `My_plugin_init_gradle`.

    Args:
        file_name: Script file name.

    Returns:
        Simple (not package-qualified) compiled class name.
    """
    stem, _, _ = file_name.rpartition('.')
    if not stem:
        stem = file_name

    name = _INVALID_CLASS_CHARACTERS.sub('_', stem)
    if not name or name[0].isdigit():
        name = f'_{name}'

    return capitalize(name)


def is_class_name(text: str) -> bool:
    """Check whether a text is a valid wrapper type name."""
    return CLASS_NAME_PATTERN.fullmatch(text) is not None


def implementation_class_name(name: str) -> str:
    """Derive the wrapper type name from a stripped script file name.

    Every dot-separated segment, such as the script variant in
    `my-plugin.init`, is converted to pascal case on its own and the
    segments are joined without the dots.

    Args:
        name: Script file name without the script extension,
            for example `my-plugin.init`.

    Returns:
        Pascal case type name, for example `MyPluginInit`.
    """
    return ''.join(kebab_case_to_pascal_case(segment) for segment in name.split('.'))
