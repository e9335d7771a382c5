"""octdepends - function dependency resolution for Octave code."""

# Load .env so OCTDEPENDS_LOG_LEVEL, OCTDEPENDS_EXCLUDE, etc. are set
# for any entry point (CLI, pytest, scripts) that imports octdepends.
from dotenv import load_dotenv

load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"

from octdepends.analyzers.depends import resolve_dependencies  # noqa: E402

__all__ = ["__version__", "resolve_dependencies"]
