"""Default settings for zenith-run.

Maps to keys in config.yaml. Override via the user config file.
"""

from pathlib import Path

from platformdirs import user_config_dir

# Platform-appropriate directories (resolved by platformdirs)
config_dir = Path(user_config_dir("zenith-run"))
config_path = config_dir / "config.yaml"

# Server defaults
server_host = "127.0.0.1"
server_port = 9848

# Execution defaults
execution_output_mode = "normal"
execution_trace_level = "errors"

# Extra packages scanned for components (standard components always load)
component_packages = ()
