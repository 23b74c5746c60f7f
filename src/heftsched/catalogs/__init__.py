from .interface import FeasibleSiteLookup, RuntimeLookup, SiteCapacityProvider
from .transformation import (
    TransformationCatalog,
    TransformationEntry,
    get_expected_runtime,
)
from .site_catalog import SiteCatalog
