import json
import typing as tp

from loguru import logger

import heftsched.catalogs as cts
import heftsched.config as config


class SiteCatalog(cts.SiteCapacityProvider):
    """Site catalog. Reports number of idle nodes for a site through
    its job managers.
    """

    def __init__(
            self,
            sites: dict[str, dict[str, tp.Any]],
            default_capacity: int = config.DEFAULT_NUMBER_OF_FREE_NODES,
    ) -> None:
        """

        :param sites: map from site handle to site description.
        :param default_capacity: capacity reported for sites without
        usable value.
        """

        self.sites = sites
        self.default_capacity = default_capacity

    @classmethod
    def from_dict(cls, data: dict[str, tp.Any], **kwargs) -> "SiteCatalog":
        sites = {json_site["handle"]: json_site for json_site in data["sites"]}
        return cls(sites=sites, **kwargs)

    @classmethod
    def from_json(cls, filename: str, **kwargs) -> "SiteCatalog":
        with open(filename) as f:
            json_data = json.load(f)

        return cls.from_dict(data=json_data, **kwargs)

    def get_idle_nodes(self, site: str) -> tp.Optional[tp.Any]:
        """Return raw idle nodes value of the job manager of site.

        :param site: site handle.
        :return: value from catalog or None.
        """

        for manager in self.sites[site].get("jobmanagers", []):
            if manager.get("universe") == config.SITE_UNIVERSE:
                return manager.get("idle-nodes")

        return None

    def get_capacity(self, site: str) -> int:
        try:
            capacity = int(self.get_idle_nodes(site=site))
        except (KeyError, TypeError, ValueError):
            logger.debug(f"No usable number of free nodes for site {site}. "
                         f"Using default {self.default_capacity}")
            return self.default_capacity

        if capacity < 1:
            logger.debug(f"Bad number of free nodes {capacity} for site "
                         f"{site}. Using default {self.default_capacity}")
            return self.default_capacity

        return capacity
