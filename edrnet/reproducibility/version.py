"""Code provenance: which commit produced a result."""

import subprocess


def get_code_version() -> str:
    """Describe the current checkout via ``git describe --always --dirty``.

    Returns:
        e.g. "a3f9c1d", "v0.1-4-ga3f9c1d-dirty", or "unknown" outside a git
        checkout or without git installed.
    """
    try:
        return subprocess.check_output(
            ["git", "describe", "--always", "--dirty"],
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"
