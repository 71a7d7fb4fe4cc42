"""Project version constants.

These constants are used in logs and the CLI ``--version`` output so that a
demo run can be traced back to a specific release.
"""

ENGINE_NAME: str = "streamnotes"
ENGINE_VERSION: str = "0.1.0"
