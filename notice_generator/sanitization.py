"""Filename sanitization for notice fragments."""

import re

# Every maximal run of characters outside [A-Za-z0-9]
_UNSAFE_RUN_PATTERN = re.compile(r"[^A-Za-z0-9]+")


def generate_file_name(name: str) -> str:
    """
    Build the fragment filename for a dependency name.

    Examples:
        "left-pad" -> "left-pad"
        "@babel/core" -> "-babel-core"
        "go-yaml/yaml" -> "go-yaml-yaml"

    Args:
        name: Dependency name as shown in the notice heading

    Returns:
        Name with every run of non-alphanumeric characters replaced by one "-"
    """
    return _UNSAFE_RUN_PATTERN.sub("-", name)
