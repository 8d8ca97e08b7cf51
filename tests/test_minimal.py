"""Smoke tests for package imports."""


def test_import_app():
    from afyaconnect.api.main import app

    assert app is not None


def test_import_client():
    from afyaconnect.client import AfyaConnectClient, FilterSession, SearchFilters

    assert AfyaConnectClient and FilterSession and SearchFilters
