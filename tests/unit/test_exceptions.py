"""Unit tests for domain exceptions."""

import pytest

from crmrules.domain.exceptions import (
    ConfigurationError,
    CrmRulesError,
    CycleDetectedError,
    DeletionBlocked,
    NotFound,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_type",
    [NotFound, ValidationError, ConfigurationError, CycleDetectedError, DeletionBlocked],
)
def test_inherits_crmrules_error(exc_type) -> None:
    assert issubclass(exc_type, CrmRulesError)


def test_not_found_message() -> None:
    """NotFound names the entity and identifier."""
    exc = NotFound("Role", "r-1")
    assert str(exc) == "Role not found: r-1"
    assert exc.entity == "Role"
    assert exc.identifier == "r-1"


def test_cycle_detected_keeps_path() -> None:
    exc = CycleDetectedError(["a", "b", "a"])
    assert exc.path == ["a", "b", "a"]
    assert str(exc) == "Circular inheritance detected: a -> b -> a"


def test_raise_not_found_catchable_as_crmrules_error() -> None:
    with pytest.raises(CrmRulesError):
        raise NotFound("Office", "nyc")
