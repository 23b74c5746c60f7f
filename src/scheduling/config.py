import pathlib

import heftsched.config as hconfig


ROOT_DIR = pathlib.Path(__file__).parent.parent.parent
GRAPHICS_DIR = ROOT_DIR / "src" / "graphics"

# Sites where workflows can run. Order of sites is used for breaking
# ties between sites with equal finish time.
SITES: list[str] = [
    "isi_viz",
    "isi_skynet",
]

# Catalogs and workflow used when nothing is given on command line.
TRANSFORMATION_CATALOG = hconfig.TRANSFORMATION_CATALOG
SITE_CATALOG = hconfig.SITE_CATALOG
WORKFLOW_TRACE = hconfig.WORKFLOW_TRACE

# Number of threads for evaluating candidate sites.
WORKERS = 1

# Iteration number, used in names of log files.
ITER_NUMBER = 0
