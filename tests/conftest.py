"""
Shared pytest fixtures and utilities for the cmatrix test suite.

This module provides:
- Isolation of cached settings from the process environment
- Utilities for testing Pydantic validation
- Common sample matrices
"""

import pytest
from typing import Any, Type
from pydantic import BaseModel, ValidationError

from cmatrix.core.config import get_settings
from cmatrix.math import Complex, Matrix


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Drop CMATRIX_* variables and the settings cache around every test."""
    import os

    for name in list(os.environ):
        if name.startswith("CMATRIX_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(os.path.dirname(__file__))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def use_settings(monkeypatch):
    """Set CMATRIX_* environment variables and refresh the cached settings."""
    def _use(**values: Any):
        for name, value in values.items():
            monkeypatch.setenv(f"CMATRIX_{name}", str(value))
        get_settings.cache_clear()
        return get_settings()
    return _use


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        *args: Any,
        expected_field: str | None = None,
        **kwargs: Any,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            expected_field: Expected field name in error (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(*args, **kwargs)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_model_equality():
    """Helper to assert that two Pydantic models are equal."""
    def _assert_equal(model1: BaseModel, model2: BaseModel) -> None:
        dict1 = model1.model_dump()
        dict2 = model2.model_dump()
        assert dict1 == dict2, f"Models not equal:\n{dict1}\n!=\n{dict2}"

    return _assert_equal


@pytest.fixture
def square_3x3() -> Matrix:
    """A non-singular 3x3 integer matrix with determinant 6."""
    return Matrix.from_integer_grid([[2, 0, 1], [1, 3, 2], [1, 1, 2]])


@pytest.fixture
def complex_2x2() -> Matrix:
    """A 2x2 matrix with non-zero imaginary parts."""
    return Matrix([[Complex(1, 1), Complex(2, 0)], [Complex(0, -1), Complex(3, 2)]])
