"""minforge: incremental aggregation, minification and lint for web sources.

  - Ordered concatenation of JavaScript/CSS sources into one artifact
  - Pluggable CSS (rcssmin) and JavaScript (calmjs.parse) minify engines
  - Staleness check that skips the whole run when the output is current
  - Per-file lint with delta caching and replayed diagnostics
  - Diagnostics fanned out to console, log and JSON report reporters
"""

__version__ = "0.1.0"
__description__ = "Incremental JavaScript/CSS aggregation, minification and lint"

from minforge.core.batch_runner import BatchRunner
from minforge.cli.app import app as cli

__all__ = ["BatchRunner", "cli", "__version__"]
