"""Global test fixtures."""

import os

# Keep tests independent of a developer's ally settings
for _key in [k for k in os.environ if k.startswith("ALLY_")]:
    del os.environ[_key]
