"""Defines methods used across internal classes"""

import logging
from contextlib import contextmanager
from typing import Any


logger = logging.getLogger(__name__)


def get_attrs(inst: Any) -> set:
    """Gets the list of instance attributes, excluding class attributes

    Parameters
    ----------
    inst : Any
        a Python object

    Returns
    -------
    set
        instance attributes
    """
    return set(dir(inst)) - set(dir(inst.__class__))


def repr_class(inst: Any, attributes: list[str] = None) -> str:
    """Provides a compact depiction of the class as a string

    Parameters
    ----------
    inst : Any
        a Python object
    attributes : list
        a list of attributes to include. Defaults to attributes attribute if None.

    Returns
    -------
    str
        compact depiction of instance
    """
    if attributes is None:
        attributes = inst.attributes
    attrs = ", ".join([f"{a}={repr(getattr(inst, a))}" for a in attributes])
    return f"{inst.__class__.__name__}({attrs})"


def custom_eq(inst: Any, other: Any, ignore: list = None) -> bool:
    """Convenience function to compare instance to another object

    Parameters
    ----------
    inst : Any
        a Python object
    other : Any
        a Python object
    ignore : list
        attributes to skip when comparing

    Returns
    -------
    bool
        whether the objects are the same
    """
    if not isinstance(other, inst.__class__):
        return False
    inst_attrs = get_attrs(inst)
    other_attrs = get_attrs(other)
    if ignore:
        inst_attrs = {a for a in inst_attrs if a not in ignore}
        other_attrs = {a for a in other_attrs if a not in ignore}
    if inst_attrs != other_attrs:
        return False
    for attr in inst_attrs:
        if getattr(inst, attr) != getattr(other, attr):
            return False
    return True


def set_immutable(inst: Any, attr: str, val: Any, cls: type = None):
    """Convenience function to make a custom class immutable

    Note that any data type that can be modified in place (like list or dict) is
    not immutable.

    Parameters
    ----------
    inst : Any
        a Python object
    attr : str
        an attribute
    val :
        the value to which to set the attribute
    cls : class
        a Python class

    Returns
    -------
    None
    """
    if cls is None:
        cls = inst.__class__
    if hasattr(inst, "_mutable"):
        super(cls, inst).__setattr__(attr, val)
    else:
        try:
            getattr(inst, attr)
        except AttributeError:
            super(cls, inst).__setattr__(attr, val)
        else:
            raise AttributeError(
                f"Cannot modify immutable attribute {repr(attr)} on {inst.__class__.__name__} object"
            )


def del_immutable(inst: Any, attr: str, cls: type = None):
    """Raises an error when trying to delete an immutable attribute

    Parameters
    ----------
    inst : Any
        an object
    attr : str
        an attribute name
    cls : class
        a Python class

    Raises
    ------
    AttributeError
    """
    if cls is None:
        cls = inst.__class__
    if attr != "_mutable":
        raise AttributeError(
            f"Cannot delete immutable attribute {repr(attr)} from {inst.__class__.__name__} object"
        )
    super(cls, inst).__delattr__(attr)


@contextmanager
def mutable(inst):
    """Context manager allowing nominally immutable classes to be modified"""
    inst._mutable = True
    try:
        yield inst
    finally:
        del inst._mutable
