"""
Hypothesis profiles for the property-based tests.

The "ci" profile is used when the CI environment variable is set, "dev"
otherwise. Override with HYPOTHESIS_PROFILE=<name>.
"""

import os

from hypothesis import settings

settings.register_profile("dev", max_examples=300)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)

settings.load_profile(
    os.environ.get("HYPOTHESIS_PROFILE", "ci" if os.environ.get("CI") else "dev")
)
