"""Entry point for the interactive stamina meter."""

import sys

from stamina.config import settings
from stamina.simulation.loop import run


if __name__ == "__main__":
    runtime_settings = settings.load_runtime_settings(sys.argv[1:])
    settings.apply_runtime_settings(runtime_settings)
    run(runtime_settings)
