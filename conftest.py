"""Root conftest, loaded before any test module imports."""

import os

# CI runners often set FORCE_COLOR=1, which makes Rich emit ANSI escape
# codes into CLI output and breaks plain-text and JSON assertions.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"
