"""tidyctl - format dirty files right before a commit.

Selects the files version control reports as dirty, filters them by
extension policy, skips files already formatted since their last change,
and runs an external formatter over the rest.
"""

__version__ = "0.1.0"
