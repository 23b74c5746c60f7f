from collections import defaultdict
from dataclasses import dataclass, field
import json
import typing as tp

from loguru import logger

from heftsched.errors import RuntimeUnavailable
import heftsched.catalogs as cts
import heftsched.config as config
import heftsched.workflows as wfs


@dataclass
class TransformationEntry:
    namespace: str
    name: str
    version: str

    # Site where transformation is installed.
    site: str

    # Map from profile key to value. Values are kept as they are in
    # catalog (usually strings).
    profiles: dict[str, tp.Any] = field(default_factory=dict)

    @property
    def transformation(self) -> tp.Tuple[str, str, str]:
        return self.namespace, self.name, self.version


class TransformationCatalog(cts.FeasibleSiteLookup, cts.RuntimeLookup):
    """Transformation catalog. Maps transformations to sites where
    they are installed and keeps expected runtimes as profiles.
    """

    def __init__(self, entries: tp.Iterable[TransformationEntry]) -> None:
        # Map from transformation to entries in catalog order.
        self.entries: dict[
            tp.Tuple[str, str, str],
            list[TransformationEntry],
        ] = defaultdict(list)

        for entry in entries:
            self.entries[entry.transformation].append(entry)

    @classmethod
    def from_dict(cls, data: dict[str, tp.Any]) -> "TransformationCatalog":
        entries: list[TransformationEntry] = []

        for json_entry in data["transformations"]:
            entries.append(TransformationEntry(
                namespace=json_entry["namespace"],
                name=json_entry["name"],
                version=str(json_entry["version"]),
                site=json_entry["site"],
                profiles=json_entry.get("profiles", dict()),
            ))

        return cls(entries=entries)

    @classmethod
    def from_json(cls, filename: str) -> "TransformationCatalog":
        with open(filename) as f:
            json_data = json.load(f)

        return cls.from_dict(data=json_data)

    def get_tc_list(self, task: wfs.Task, site: str) -> list[TransformationEntry]:
        return [entry for entry in self.entries.get(task.transformation, [])
                if entry.site == site]

    def get_site_list(self, task: wfs.Task, sites: list[str]) -> list[str]:
        """Return configured sites where transformation is installed.
        Order follows `sites`.

        :param task: task to look up.
        :param sites: configured sites.
        :return: list of site names.
        """

        installed = {entry.site
                     for entry in self.entries.get(task.transformation, [])}

        return [site for site in sites if site in installed]

    def get_runtime(self, task: wfs.Task, site: str) -> int:
        """Return expected runtime from the first catalog entry for
        task on site.

        :param task: task to look up.
        :param site: site name.
        :return: runtime in seconds.
        """

        entries = self.get_tc_list(task=task, site=site)
        if not entries:
            raise RuntimeUnavailable(
                f"No catalog entry for {task.fqdn} on site {site}"
            )

        if len(entries) > 1:
            logger.debug(f"Picking first of {len(entries)} entries "
                         f"for {task.fqdn} on site {site}")

        return get_expected_runtime(entries[0])


def get_expected_runtime(entry: TransformationEntry) -> int:
    """Return expected runtime from the profiles of entry.

    :param entry: catalog entry.
    :return: runtime in seconds.
    """

    value = entry.profiles.get(config.RUNTIME_PROFILE_KEY)
    if value is None:
        raise RuntimeUnavailable(
            f"No runtime specified for {entry.name} on site {entry.site}"
        )

    try:
        runtime = int(value)
    except (TypeError, ValueError):
        raise RuntimeUnavailable(
            f"Invalid runtime {value!r} for {entry.name} on site {entry.site}"
        )

    if runtime < 1:
        raise RuntimeUnavailable(
            f"Invalid runtime {runtime} for {entry.name} on site {entry.site}"
        )

    return runtime
