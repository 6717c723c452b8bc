"""Allow ``python -m varietytracker`` to start the API server."""

from varietytracker.main import run

run()
