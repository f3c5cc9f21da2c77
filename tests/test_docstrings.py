# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Docstring completeness checks for parameters and return values."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Iterator, List, Set

import pytest
from numpydoc.docscrape import NumpyDocString

import matchday

_NONE_ANNOTATIONS = {"none", "nonetype", "typing.none", "builtins.none", "builtins.nonetype"}


def _iter_modules() -> Iterator[ModuleType]:
    yield matchday
    for info in pkgutil.walk_packages(matchday.__path__, prefix="matchday."):
        yield importlib.import_module(info.name)


def _iter_callables(module: ModuleType) -> Iterator[object]:
    for name, obj in inspect.getmembers(module):
        if name.startswith("__") or getattr(obj, "__module__", None) != module.__name__:
            continue
        if inspect.isfunction(obj):
            yield obj
        elif inspect.isclass(obj):
            yield obj
            for meth_name, meth in vars(obj).items():
                if meth_name.startswith("__"):
                    continue
                if isinstance(meth, (staticmethod, classmethod)):
                    meth = meth.__func__
                if inspect.isfunction(meth):
                    yield meth


_MODULES: List[ModuleType] = list(_iter_modules())
_CALLABLES: List[object] = [obj for module in _MODULES for obj in _iter_callables(module)]


def _object_id(obj: object) -> str:
    module = getattr(obj, "__module__", "<unknown>")
    name = getattr(obj, "__qualname__", getattr(obj, "__name__", repr(obj)))
    return f"{module}.{name}"


def _documented_parameters(docstring: str | None) -> Set[str]:
    if not docstring:
        return set()
    return {name for name, _, _ in NumpyDocString(docstring)["Parameters"]}


def _returns_value(sig: inspect.Signature) -> bool:
    annotation = sig.return_annotation
    if annotation is inspect.Signature.empty or annotation in {None, type(None)}:
        return False
    return not (isinstance(annotation, str) and annotation.strip().lower() in _NONE_ANNOTATIONS)


@pytest.mark.parametrize("module", _MODULES, ids=lambda m: m.__name__)
def test_modules_have_docstrings(module: ModuleType) -> None:
    """Every module opens with a summary docstring."""
    assert inspect.getdoc(module), f"Module {module.__name__} has no docstring"


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_parameters_are_documented(obj: object) -> None:
    """Assert that every parameter in the signature is described in the docstring."""
    params = [
        p
        for p in inspect.signature(obj).parameters.values()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD) and p.name not in {"self", "cls"}
    ]
    if not params:
        pytest.skip("No parameters requiring documentation")

    documented = _documented_parameters(inspect.getdoc(obj))
    missing = [p.name for p in params if p.name not in documented]

    assert not missing, f"Docstring for {_object_id(obj)} is missing parameter entries: " + ", ".join(missing)


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_returns_are_documented(obj: object) -> None:
    """Require a Returns section whenever the callable annotates a non-None value."""
    if inspect.isclass(obj) or not _returns_value(inspect.signature(obj)):
        pytest.skip("Return value does not require documentation")

    docstring = inspect.getdoc(obj)
    assert docstring and NumpyDocString(docstring)["Returns"], f"Docstring for {_object_id(obj)} is missing a Returns section"
