from .site import Site
from .manager import SiteRegistry
