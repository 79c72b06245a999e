"""Allow ``python -m tidyctl``."""

from tidyctl.cli.main import app

app()
