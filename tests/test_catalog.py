import pytest

from handyhearts.config.settings import default_catalog_path
from handyhearts.data.catalog import CatalogError, ServiceCatalog, UnknownServiceError
from handyhearts.engine import ServiceRate


def test_lists_active_services_in_file_order(catalog):
    names = [s.name for s in catalog.list_services()]
    assert names == ["Tech Concierge", "Errand Runner", "Companion Care", "Care"]
    assert len(catalog.list_services(active_only=False)) == 5
    assert len(catalog) == 5


def test_get_returns_validated_service(catalog):
    assert catalog.get("care") == ServiceRate(
        name="Care", base_rate_cents=3500, min_hours=2,
        service_id="care", description="General in-home care visit.",
    )


def test_inactive_and_unknown_services_are_rejected(catalog):
    with pytest.raises(UnknownServiceError):
        catalog.get("retired")
    with pytest.raises(UnknownServiceError, match="Unknown service 'nope'"):
        catalog.get("nope")


def test_find_by_category(catalog):
    assert catalog.find_by_category("companion_care").name == "Companion Care"
    assert catalog.find_by_category("errand").name == "Errand Runner"
    # no match falls back to the first active service
    assert catalog.find_by_category("wifi_setup").name == "Tech Concierge"
    assert catalog.find_by_category("").name == "Tech Concierge"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ServiceCatalog(tmp_path / "missing.csv")


def test_missing_columns(tmp_path):
    path = tmp_path / "services.csv"
    path.write_text("id,name\n1,Care\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="base_rate_cents, min_hours"):
        ServiceCatalog(path)


def test_malformed_row_names_the_service(tmp_path):
    path = tmp_path / "services.csv"
    path.write_text(
        "id,name,base_rate_cents,min_hours\n"
        "ok,Care,3500,2\n"
        "neg,Broken,-1,2\n",
        encoding="utf-8",
    )
    with pytest.raises(CatalogError, match="Service neg"):
        ServiceCatalog(path)


def test_duplicate_ids_are_rejected(tmp_path):
    path = tmp_path / "services.csv"
    path.write_text(
        "id,name,base_rate_cents,min_hours\n"
        "a,Care,3500,2\n"
        "a,Care Again,3500,2\n",
        encoding="utf-8",
    )
    with pytest.raises(CatalogError, match="Duplicate service id 'a'"):
        ServiceCatalog(path)


def test_is_active_defaults_to_true(tmp_path):
    path = tmp_path / "services.csv"
    path.write_text("id,name,base_rate_cents,min_hours\nx,Care,3500,2\n", encoding="utf-8")
    assert ServiceCatalog(path).get("x").base_rate_cents == 3500


def test_reload_picks_up_changes(catalog_path):
    catalog = ServiceCatalog(catalog_path)
    catalog_path.write_text(
        "id,name,base_rate_cents,min_hours,is_active\ncare,Care,4000,2,true\n",
        encoding="utf-8",
    )
    catalog.reload()
    assert catalog.get("care").base_rate_cents == 4000
    assert len(catalog) == 1


def test_bundled_catalog_loads():
    catalog = ServiceCatalog(default_catalog_path())
    assert catalog.get("care").base_rate_cents == 3500
    assert catalog.get("1").name == "Tech Concierge"
