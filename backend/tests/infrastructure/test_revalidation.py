"""Tests for PathRevalidator — per-path invalidation versions."""

from dashboard.infrastructure.revalidation import PathRevalidator, get_revalidator


def test_unknown_path_is_version_zero():
    assert PathRevalidator().version("/dashboard/invoices") == 0


def test_revalidate_increments_version():
    revalidator = PathRevalidator()
    assert revalidator.revalidate_path("/dashboard/invoices") == 1
    assert revalidator.revalidate_path("/dashboard/invoices") == 2
    assert revalidator.version("/dashboard/invoices") == 2


def test_paths_are_independent():
    revalidator = PathRevalidator()
    revalidator.revalidate_path("/dashboard/invoices")
    assert revalidator.version("/dashboard") == 0
    assert revalidator.revalidated_at("/dashboard") is None
    assert revalidator.revalidated_at("/dashboard/invoices") is not None


def test_dependency_returns_process_wide_instance():
    assert get_revalidator() is get_revalidator()
