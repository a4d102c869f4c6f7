import importlib.util
import warnings
from pathlib import Path

from pydantic.warnings import PydanticDeprecatedSince20

from app.vendor.schemas import VendorSummary

SCHEMAS_FILE = Path(__file__).resolve().parents[1] / "vendor" / "schemas.py"


def test_vendor_schemas_use_current_pydantic_config():
    # load a private copy so the shared module keeps its classes
    spec = importlib.util.spec_from_file_location("vendor_schemas_copy", SCHEMAS_FILE)
    module = importlib.util.module_from_spec(spec)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        spec.loader.exec_module(module)

    assert not [w for w in caught if issubclass(w.category, PydanticDeprecatedSince20)]


def test_vendor_summary_reads_orm_attributes(make_vendor):
    vendor = make_vendor(vendor_name="Summary Co")

    summary = VendorSummary.model_validate(vendor)

    assert summary.vendor_name == "Summary Co"
    assert summary.logo_url is None
