import importlib.metadata, importlib.util, sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

project = "rydsim"
copyright = f"{datetime.now().year}, rydsim"
author = "rydsim contributors"

try:
    release = importlib.metadata.version("rydsim")
except importlib.metadata.PackageNotFoundError:
    release = "0.1"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.autosectionlabel",
]

autodoc_member_order = "bysource"

html_theme = "sphinx_rtd_theme"

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
