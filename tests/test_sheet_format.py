from billing_recon.domain.models import Platform
from billing_recon.domain.repositories import RawSheet
from billing_recon.infrastructure.parsing.sheet_format import (
    ConsolidatedSheet,
    LegacySheet,
    detect_sheet_format,
    infer_platform,
    is_consolidated,
)


def test_consolidated_needs_account_and_origin():
    assert is_consolidated({"cliente_cuenta": "Acme", " Origen ": "WIALON"})
    assert is_consolidated({"CLIENTE_CUENT": "Acme", "ORIGEN": "LEASE"})
    assert not is_consolidated({"CLIENTE_CUENTA": "Acme"})
    assert not is_consolidated({"CLIENTE": "Acme", "ORIGEN": "WIALON"})


def test_detect_consolidated_sheet():
    sheet = RawSheet(name="Hoja1", rows=[{"CLIENTE_CUENTA": "Acme", "ORIGEN": "WIALON"}])

    layout = detect_sheet_format(sheet)

    assert isinstance(layout, ConsolidatedSheet)
    assert layout.name == "Hoja1"


def test_detect_legacy_sheet_infers_platform_from_name():
    sheet = RawSheet(name="Unidades Wialon", rows=[{"CUENTA": "Acme"}])

    layout = detect_sheet_format(sheet)

    assert isinstance(layout, LegacySheet)
    assert layout.platform is Platform.WIALON


def test_legacy_sheet_with_unknown_name_has_no_platform():
    layout = detect_sheet_format(RawSheet(name="Resumen", rows=[{"CUENTA": "Acme"}]))

    assert isinstance(layout, LegacySheet)
    assert layout.platform is None


def test_empty_sheet_is_not_classified():
    assert detect_sheet_format(RawSheet(name="LEASE", rows=[])) is None


def test_infer_platform_is_case_insensitive():
    assert infer_platform("lease") is Platform.LEASE
    assert infer_platform("ADAS 2025") is Platform.ADAS
    assert infer_platform("combustible") is Platform.COMBUSTIBLE
    assert infer_platform("Otros") is None
