"""Shared name utilities for layerguard."""

from __future__ import annotations


def simple_name(name: str) -> str:
    """Return the last dotted segment of a name.

    Examples:
        >>> simple_name("com.myapp.domain.User")
        'User'
        >>> simple_name("User")
        'User'
        >>> simple_name("@Transactional")
        '@Transactional'
    """
    return name.rsplit(".", 1)[-1]


def is_same_or_nested(type_name: str, fqn: str) -> bool:
    """Return True when ``type_name`` is ``fqn`` or a dotted member of it.

    Examples:
        >>> is_same_or_nested("com.app.Outer.Inner", "com.app.Outer")
        True
        >>> is_same_or_nested("com.app.OuterX", "com.app.Outer")
        False
    """
    return type_name == fqn or type_name.startswith(fqn + ".")


def qualify(package: str, name: str) -> str:
    """Join a package name and a simple name; the default package is ``""``."""
    if not package:
        return name
    return f"{package}.{name}"
