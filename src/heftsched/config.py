import pathlib


SRC_DIR = pathlib.Path(__file__).parent.parent.absolute()
LOGS_DIR = str(SRC_DIR / "logs")

RESOURCES_DIR = pathlib.Path(__file__).parent.absolute() / "resources"
TRANSFORMATION_CATALOG = str(RESOURCES_DIR / "transformations.json")
SITE_CATALOG = str(RESOURCES_DIR / "sites.json")
WORKFLOW_TRACE = str(RESOURCES_DIR / "diamond.json")

# The average bandwidth between the sites.
# Measures in megabytes per second.
AVERAGE_BANDWIDTH: float = 5

# The average data that is transferred in between 2 jobs in the
# workflow. Measures in megabytes.
AVERAGE_DATA_SIZE_BETWEEN_JOBS: float = 2

# Number of processors associated with a site if not found in the site
# catalog.
DEFAULT_NUMBER_OF_FREE_NODES: int = 10

# Profile key in transformation catalog that gives expected runtime.
RUNTIME_PROFILE_KEY = "runtime"

# Universe of the job manager that reports idle nodes of a site.
SITE_UNIVERSE = "vanilla"
